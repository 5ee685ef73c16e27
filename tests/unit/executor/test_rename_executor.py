"""Tests for executor/rename.py module."""

import errno
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from exifnamer.executor.rename import (
    ConflictPolicy,
    RenameErrorType,
    RenameExecutor,
    RenamePlan,
    ensure_unique_path,
)


@pytest.fixture
def photo(temp_dir: Path) -> Path:
    """Create a photo file to rename."""
    path = temp_dir / "IMG_1234.JPG"
    path.write_bytes(b"jpeg data")
    return path


class TestCreatePlan:
    """Tests for RenameExecutor.create_plan."""

    def test_destination_in_same_directory(self, photo: Path) -> None:
        """The new name is resolved next to the source."""
        plan = RenameExecutor().create_plan(photo, "230704_150809.JPG")

        assert plan.destination_path == photo.parent / "230704_150809.JPG"
        assert plan.on_conflict is ConflictPolicy.SKIP

    def test_unique_policy_adds_suffix(self, photo: Path) -> None:
        """With the unique policy a taken name gets a counter."""
        (photo.parent / "new.JPG").touch()

        plan = RenameExecutor(ConflictPolicy.UNIQUE).create_plan(photo, "new.JPG")

        assert plan.destination_path.name == "new (1).JPG"

    def test_unique_policy_ignores_own_name(self, photo: Path) -> None:
        """A file already carrying the new name is not given a suffix."""
        plan = RenameExecutor(ConflictPolicy.UNIQUE).create_plan(photo, photo.name)

        assert plan.is_noop

    def test_unique_policy_skips_claimed_names(self, photo: Path) -> None:
        """Names already planned in the batch get a counter too."""
        claimed = {photo.parent / "new.JPG"}

        plan = RenameExecutor(ConflictPolicy.UNIQUE).create_plan(
            photo, "new.JPG", claimed
        )

        assert plan.destination_path.name == "new (1).JPG"

    def test_unique_policy_ignores_link_to_source(self, photo: Path) -> None:
        """A destination that is the source file itself is not uniquified."""
        alias = photo.parent / "linked.JPG"
        os.link(photo, alias)

        plan = RenameExecutor(ConflictPolicy.UNIQUE).create_plan(photo, alias.name)

        assert plan.destination_path == alias


class TestValidate:
    """Tests for RenameExecutor.validate."""

    def test_valid_plan(self, photo: Path) -> None:
        """A free destination next to an existing file is valid."""
        executor = RenameExecutor()
        assert executor.validate(executor.create_plan(photo, "new.JPG")) == []

    def test_missing_source(self, temp_dir: Path) -> None:
        """A missing source is reported."""
        executor = RenameExecutor()
        plan = executor.create_plan(temp_dir / "gone.JPG", "new.JPG")

        errors = executor.validate(plan)

        assert any("does not exist" in e for e in errors)

    def test_source_is_directory(self, temp_dir: Path) -> None:
        """Directories are not renamed."""
        folder = temp_dir / "DCIM"
        folder.mkdir()
        executor = RenameExecutor()

        errors = executor.validate(executor.create_plan(folder, "new"))

        assert any("not a file" in e for e in errors)

    @pytest.mark.parametrize("name", ["", ".", "..", "sub/new.JPG"])
    def test_invalid_names(self, photo: Path, name: str) -> None:
        """Names that are empty, dot entries or contain a separator are rejected."""
        executor = RenameExecutor()

        errors = executor.validate(executor.create_plan(photo, name))

        assert any("Invalid destination name" in e for e in errors)

    def test_existing_destination_skip(self, photo: Path) -> None:
        """An existing destination is a conflict under the skip policy."""
        (photo.parent / "new.JPG").touch()
        executor = RenameExecutor()

        errors = executor.validate(executor.create_plan(photo, "new.JPG"))

        assert any("already exists" in e for e in errors)

    def test_existing_destination_overwrite(self, photo: Path) -> None:
        """The overwrite policy accepts an existing destination."""
        (photo.parent / "new.JPG").touch()
        executor = RenameExecutor(ConflictPolicy.OVERWRITE)

        assert executor.validate(executor.create_plan(photo, "new.JPG")) == []

    def test_claimed_destination_conflicts(self, photo: Path) -> None:
        """A destination planned for another file conflicts like an existing one."""
        executor = RenameExecutor()
        claimed = {photo.parent / "new.JPG"}

        errors = executor.validate(executor.create_plan(photo, "new.JPG"), claimed)

        assert any("already exists" in e for e in errors)

    def test_destination_naming_source_is_not_a_conflict(self, photo: Path) -> None:
        """Another name for the source file itself is not a conflict."""
        alias = photo.parent / "linked.JPG"
        os.link(photo, alias)
        executor = RenameExecutor()

        assert executor.validate(executor.create_plan(photo, alias.name)) == []


class TestExecute:
    """Tests for RenameExecutor.execute."""

    def test_renames_file(self, photo: Path) -> None:
        """The file is moved to its new name with its content."""
        executor = RenameExecutor()
        plan = executor.create_plan(photo, "new.JPG")

        result = executor.execute(plan)

        assert result.success
        assert not result.unchanged
        assert not photo.exists()
        assert plan.destination_path.read_bytes() == b"jpeg data"

    def test_noop(self, photo: Path) -> None:
        """A file that already has its new name is left alone."""
        executor = RenameExecutor()

        result = executor.execute(executor.create_plan(photo, photo.name))

        assert result.success
        assert result.unchanged
        assert photo.exists()

    def test_conflict_skip(self, photo: Path) -> None:
        """An existing destination is not overwritten by default."""
        other = photo.parent / "new.JPG"
        other.write_bytes(b"other")
        executor = RenameExecutor()

        result = executor.execute(executor.create_plan(photo, "new.JPG"))

        assert not result.success
        assert result.error_type is RenameErrorType.CONFLICT
        assert other.read_bytes() == b"other"
        assert photo.exists()

    def test_conflict_overwrite(self, photo: Path) -> None:
        """The overwrite policy replaces the existing file."""
        other = photo.parent / "new.JPG"
        other.write_bytes(b"other")
        executor = RenameExecutor(ConflictPolicy.OVERWRITE)

        result = executor.execute(executor.create_plan(photo, "new.JPG"))

        assert result.success
        assert other.read_bytes() == b"jpeg data"

    def test_conflict_unique(self, photo: Path) -> None:
        """The unique policy keeps both files."""
        other = photo.parent / "new.JPG"
        other.write_bytes(b"other")
        executor = RenameExecutor(ConflictPolicy.UNIQUE)

        result = executor.execute(executor.create_plan(photo, "new.JPG"))

        assert result.success
        assert result.destination_path == photo.parent / "new (1).JPG"
        assert other.read_bytes() == b"other"

    def test_invalid_name(self, photo: Path) -> None:
        """Invalid names fail without touching the file."""
        executor = RenameExecutor()

        result = executor.execute(executor.create_plan(photo, ".."))

        assert not result.success
        assert result.error_type is RenameErrorType.INVALID_NAME
        assert photo.exists()

    def test_missing_source(self, temp_dir: Path) -> None:
        """A missing source fails with NOT_FOUND."""
        executor = RenameExecutor()

        result = executor.execute(executor.create_plan(temp_dir / "a.JPG", "b.JPG"))

        assert result.error_type is RenameErrorType.NOT_FOUND

    @pytest.mark.parametrize(
        ("code", "error_type"),
        [
            (errno.EACCES, RenameErrorType.PERMISSION),
            (errno.EXDEV, RenameErrorType.CROSS_DEVICE),
            (errno.ENAMETOOLONG, RenameErrorType.INVALID_NAME),
            (errno.EBUSY, RenameErrorType.UNKNOWN),
        ],
    )
    def test_os_errors_are_categorized(
        self, photo: Path, code: int, error_type: RenameErrorType
    ) -> None:
        """OS errors map to error types by errno."""
        executor = RenameExecutor()
        plan = executor.create_plan(photo, "new.JPG")

        with patch("os.replace", side_effect=OSError(code, os.strerror(code))):
            result = executor.execute(plan)

        assert not result.success
        assert result.error_type is error_type
        assert photo.exists()


class TestDryRun:
    """Tests for RenameExecutor.dry_run."""

    def test_does_not_rename(self, photo: Path) -> None:
        """Dry runs describe the plan without changing anything."""
        executor = RenameExecutor()
        plan = executor.create_plan(photo, "new.JPG")

        preview = executor.dry_run(plan)

        assert preview["valid"] is True
        assert preview["unchanged"] is False
        assert preview["destination"] == str(photo.parent / "new.JPG")
        assert preview["on_conflict"] == "skip"
        assert photo.exists()

    def test_reports_conflict(self, photo: Path) -> None:
        """Conflicts are listed as errors."""
        (photo.parent / "new.JPG").touch()
        executor = RenameExecutor()

        preview = executor.dry_run(executor.create_plan(photo, "new.JPG"))

        assert preview["valid"] is False
        assert preview["errors"]

    def test_noop(self, photo: Path) -> None:
        """A file with the right name is reported as unchanged."""
        executor = RenameExecutor()
        preview = executor.dry_run(executor.create_plan(photo, photo.name))

        assert preview["unchanged"] is True
        assert preview["valid"] is True

    def test_reports_batch_collision(self, photo: Path) -> None:
        """Destinations claimed earlier in the batch make the plan invalid."""
        executor = RenameExecutor()
        claimed = {photo.parent / "new.JPG"}

        preview = executor.dry_run(executor.create_plan(photo, "new.JPG"), claimed)

        assert preview["valid"] is False
        assert preview["unchanged"] is False


class TestRenamePlan:
    """Tests for RenamePlan."""

    def test_is_noop(self) -> None:
        """is_noop compares source and destination."""
        assert RenamePlan(Path("/a/x.jpg"), Path("/a/x.jpg")).is_noop
        assert not RenamePlan(Path("/a/x.jpg"), Path("/a/y.jpg")).is_noop

    def test_targets_source_same_file(self, photo: Path) -> None:
        """targets_source is true for another name of the same file."""
        alias = photo.parent / "linked.JPG"
        os.link(photo, alias)

        plan = RenamePlan(photo, alias)

        assert not plan.is_noop
        assert plan.targets_source

    def test_targets_source_missing_destination(self, photo: Path) -> None:
        """A destination that does not exist is never the source."""
        assert not RenamePlan(photo, photo.parent / "new.JPG").targets_source


class TestEnsureUniquePath:
    """Tests for ensure_unique_path function."""

    def test_free_path_unchanged(self, temp_dir: Path) -> None:
        """A free path is returned as-is."""
        path = temp_dir / "a.jpg"
        assert ensure_unique_path(path) == path

    def test_counts_up(self, temp_dir: Path) -> None:
        """Counters increase until a free name is found."""
        (temp_dir / "a.jpg").touch()
        (temp_dir / "a (1).jpg").touch()

        assert ensure_unique_path(temp_dir / "a.jpg") == temp_dir / "a (2).jpg"

    def test_gives_up(self, temp_dir: Path) -> None:
        """Raises RuntimeError after max_attempts."""
        (temp_dir / "a.jpg").touch()
        (temp_dir / "a (1).jpg").touch()

        with pytest.raises(RuntimeError):
            ensure_unique_path(temp_dir / "a.jpg", max_attempts=1)

    def test_taken_paths_are_skipped(self, temp_dir: Path) -> None:
        """Paths in taken count as existing."""
        taken = {temp_dir / "a.jpg", temp_dir / "a (1).jpg"}

        result = ensure_unique_path(temp_dir / "a.jpg", taken=taken)

        assert result == temp_dir / "a (2).jpg"

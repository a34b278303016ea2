"""Release cutting: version resolution, release notes and the step sequencer."""

from relcut.release.errors import ReleaseError, ReleaseErrorKind
from relcut.release.ports import GitOperations
from relcut.release.sequencer import ReleaseSequencer, ReleaseStage
from relcut.release.version import BASE_VERSION, increment_version, latest_version_tag

__all__ = [
    "BASE_VERSION",
    "GitOperations",
    "ReleaseError",
    "ReleaseErrorKind",
    "ReleaseSequencer",
    "ReleaseStage",
    "increment_version",
    "latest_version_tag",
]

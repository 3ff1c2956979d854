from typing import Optional


class MalformedSnapshotError(ValueError):
    """Replay data that cannot form a valid frame sequence.

    Raised at load time only (duplicate ids within a kind, missing or mistyped
    required fields, non-list collections, unparsable JSON) so that playback
    never discovers corrupt frames mid-way.

    Attributes:
        frame_index: Index of the offending frame, ``None`` when the whole
            document is unreadable.
    """

    def __init__(self, message: str, frame_index: Optional[int] = None):
        if frame_index is not None:
            message = f"frame {frame_index}: {message}"
        super().__init__(message)
        self.frame_index = frame_index

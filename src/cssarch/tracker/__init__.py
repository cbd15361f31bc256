from cssarch.tracker.api import TrackResult, track

__all__ = ["TrackResult", "track"]

from .text_port import TextExtractorPort
from .tracker_port import ProcessedTrackerPort

__all__ = ["ProcessedTrackerPort", "TextExtractorPort"]

"""Camera Evolution: render single frames through simulated photographic eras."""

from .catalog import ERA_CATALOG, FORMAT_CATALOG, get_era, get_format
from .core import capture, render
from .errors import EmptyFrameError, EncodingFailure, MissingSource, PipelineError
from .frames import CaptureArtifact, PixelBuffer, RawFrame

__version__ = "0.1.0"

"""Language feature lessons and an elapsed time / memory recorder."""

from featurebench.service.recorder.recorder import Recorder

__version__ = "0.1.0"

__all__ = ["Recorder", "__version__"]

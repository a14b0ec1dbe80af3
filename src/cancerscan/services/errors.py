"""Error taxonomy for the prediction pipeline."""


class PredictionError(Exception):
    """Base class for failures while producing or storing a prediction."""


class ModelNotReadyError(PredictionError):
    """The model has not been loaded (yet, or ever)."""


class ImageDecodeError(PredictionError):
    """The uploaded bytes could not be decoded into an RGB image."""


class InferenceError(PredictionError):
    """The model raised or returned an unusable output."""


class PersistenceError(PredictionError):
    """The prediction record could not be written to the result store."""

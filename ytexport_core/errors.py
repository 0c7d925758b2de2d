class ExtractionError(Exception):
    """Base for failures that end an extraction run."""


class ContainerNotFoundError(ExtractionError, LookupError):
    """The comments container never appeared on the page."""


class ExtractionCancelled(ExtractionError):
    """The host stopped the run while it was waiting between scrolls."""

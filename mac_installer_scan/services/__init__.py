"""Services (business logic) for mac-installer-scan."""

from . import walker_service
from . import lister_service
from . import classifier_service
from . import scanner_service

__all__ = ["walker_service", "lister_service", "classifier_service", "scanner_service"]

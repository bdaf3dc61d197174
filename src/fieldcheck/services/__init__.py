"""Service layer: file loading and validation runs.

INVARIANT: All service-layer methods return ServiceResult.
"""

from fieldcheck.services.result import ServiceError, ServiceResult
from fieldcheck.services.validate import ValidateService

__all__ = ["ServiceError", "ServiceResult", "ValidateService"]

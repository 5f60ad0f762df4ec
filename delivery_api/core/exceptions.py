"""
Domain Exceptions

Every error raised by the ordering workflow derives from DeliveryError,
so the HTTP layer can translate the whole family in one place.
Each subclass carries the HTTP status it maps to.
"""

from typing import Any, Optional


class DeliveryError(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    error: str = "Erro interno no servidor"

    def __init__(self, message: str, details: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DeliveryError):
    """
    A referenced entity does not exist.

    Attributes:
        entity_kind: Entity name as shown to clients ("Cliente", "Produto", ...)
        entity_id: The identifier that failed to resolve
    """

    status_code = 404
    error = "Recurso não encontrado"

    def __init__(self, entity_kind: str, entity_id: Any):
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        super().__init__(f"{entity_kind} com ID {entity_id} não encontrado")


class ValidationError(DeliveryError):
    """Structurally invalid request, rejected before lookup or persistence."""

    status_code = 400
    error = "Erro de validação"


class InvalidStatusTransitionError(DeliveryError):
    """The order lifecycle does not permit the requested transition."""

    status_code = 409
    error = "Transição de status inválida"

    def __init__(self, current: Any, target: Any):
        self.current = current
        self.target = target
        super().__init__(
            f"Transição de {getattr(current, 'value', current)} "
            f"para {getattr(target, 'value', target)} não permitida"
        )


class PersistenceError(DeliveryError):
    """Storage failure; the order must be treated as not created."""

    status_code = 500
    error = "Erro de persistência"

"""
Erreurs métier levées par la couche d'accès aux données et les services.
Les routers les traduisent en réponses HTTP (400, 404, 409).
"""


class RecordError(Exception):
    """Base de toutes les erreurs liées aux enregistrements."""


class RecordValidationError(RecordError, ValueError):
    """Données incomplètes ou référençant un parent inexistant."""


class IdentityMismatch(RecordError, ValueError):
    """L'identifiant du corps de requête ne correspond pas à la ressource ciblée."""

    def __init__(self, path_id, body_id):
        self.path_id = path_id
        self.body_id = body_id
        super().__init__(
            f"L'identifiant du corps ({'absent' if body_id is None else body_id}) "
            f"ne correspond pas à celui de l'URL ({path_id})."
        )


class RecordNotFound(RecordError, LookupError):
    """L'enregistrement demandé n'existe pas (ou plus)."""

    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} introuvable.")


class DuplicateRecord(RecordError, ValueError):
    """Une clé fournie par le client existe déjà."""


class ConcurrencyConflict(RecordError):
    """L'enregistrement a été modifié ou supprimé par un autre écrivain depuis sa lecture."""

    def __init__(self, entity: str, record_id):
        self.entity = entity
        self.record_id = record_id
        super().__init__(
            f"{entity} {record_id} a été modifié par une autre requête. "
            "Rechargez-le puis soumettez à nouveau vos modifications."
        )

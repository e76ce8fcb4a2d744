"""
Opérations d'écriture communes aux repositories.

- Verrou optimiste : chaque table porte une colonne Version. Le remplacement
  d'une ligne est un unique UPDATE conditionnel (WHERE pk = :id AND Version = :v) ;
  zéro ligne affectée signifie qu'un autre écrivain a modifié ou supprimé la ligne.
- Cascade : les lignes dépendantes et la ligne parente sont supprimées dans la
  même transaction, validée une seule fois.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from data_access_layer.exceptions import ConcurrencyConflict, RecordNotFound, RecordValidationError

logger = logging.getLogger(__name__)


def require_fields(entity: str, values: dict) -> None:
    """Lève une RecordValidationError si un champ obligatoire est absent."""
    missing = [field for field, value in values.items() if value is None]
    if missing:
        raise RecordValidationError(f"{entity} : champs obligatoires manquants ({', '.join(missing)}).")


def insert_row(db: Session, entity: str, instance):
    """Insère une ligne, valide la transaction et recharge les valeurs générées (ID, Version)."""
    db.add(instance)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise RecordValidationError(f"{entity} : contrainte d'intégrité violée.") from exc
    db.refresh(instance)
    return instance


def conditional_update(
    db: Session,
    model,
    entity: str,
    record_id: int,
    values: dict,
    expected_version: Optional[int] = None,
) -> int:
    """
    Remplace toutes les colonnes `values` de la ligne `record_id` si sa version
    vaut `expected_version`, et incrémente la version. Retourne la nouvelle version.

    Sans version attendue, la version lue juste avant l'écriture sert de référence :
    seule une suppression ou une écriture concurrente dans cet intervalle provoque un conflit.
    """
    if expected_version is None:
        expected_version = db.execute(
            select(model.version).where(model.id == record_id)
        ).scalar()
        if expected_version is None:
            raise ConcurrencyConflict(entity, record_id)

    try:
        result = db.execute(
            update(model)
            .where(model.id == record_id, model.version == expected_version)
            .values(**values, version=expected_version + 1)
            .execution_options(synchronize_session=False)
        )
    except IntegrityError as exc:
        db.rollback()
        raise RecordValidationError(f"{entity} {record_id} : contrainte d'intégrité violée.") from exc

    if result.rowcount != 1:
        db.rollback()
        logger.warning(
            "Conflit de concurrence sur %s %s (version attendue %s)",
            entity, record_id, expected_version,
        )
        raise ConcurrencyConflict(entity, record_id)

    db.commit()
    return expected_version + 1


def delete_row(db: Session, model, entity: str, record_id: int, cascades: Iterable = ()):
    """
    Supprime la ligne `record_id` après avoir exécuté les suppressions en cascade
    `cascades`, le tout dans une seule transaction. Retourne l'instance supprimée (détachée).
    """
    instance = db.get(model, record_id)
    if instance is None:
        raise RecordNotFound(entity, record_id)
    # Détachée avant la suppression : ses attributs restent lisibles après le commit
    db.expunge(instance)

    try:
        for statement in cascades:
            db.execute(statement.execution_options(synchronize_session=False))
        result = db.execute(
            delete(model)
            .where(model.id == record_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # Supprimée entre-temps par une autre requête
            db.rollback()
            raise RecordNotFound(entity, record_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    return instance

from .duna_record_repository import SQLAlchemyDunaRecordRepository

__all__ = ["SQLAlchemyDunaRecordRepository"]

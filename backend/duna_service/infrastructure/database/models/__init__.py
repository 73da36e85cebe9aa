from .duna_record import DunaRecordModel

__all__ = ["DunaRecordModel"]

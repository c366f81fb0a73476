from __future__ import annotations


class KeyValueSourceError(Exception):
    pass


class InvalidFilterOperation(KeyValueSourceError):
    def __init__(self, op):
        self.op = op
        super().__init__(f'Unrecognized filter operation "{op}"')


class InvalidCursor(KeyValueSourceError):
    def __init__(self, cursor, reason: str = "malformed cursor"):
        self.cursor = cursor
        super().__init__(f'Invalid cursor "{cursor}": {reason}')


class RecordConflict(KeyValueSourceError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Entry with id "{key}" already exists')


class RecordNotFound(KeyValueSourceError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Entry with id "{key}" does not exist')

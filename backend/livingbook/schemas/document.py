# backend/livingbook/schemas/document.py
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

# keys a client may not smuggle into the free-form part of a document
RESERVED_KEYS = {"id", "_id"}


class DocumentModel(BaseModel):
    """
    Base for every stored collection: known fields are validated,
    anything else the client sends is kept and echoed back untouched.
    Wire names are camelCase aliases; python names work too.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def extra_attributes(self) -> Dict[str, Any]:
        extra = self.model_extra or {}
        return {k: v for k, v in extra.items() if k not in RESERVED_KEYS}

    @classmethod
    def from_document(cls, attributes: Dict[str, Any] | None, **columns: Any):
        """
        Build an output model from stored attributes plus typed columns.
        Columns always win: stored keys that shadow a field (by name or
        alias) are dropped.
        """
        shadowed = set(cls.model_fields)
        shadowed.update(f.alias for f in cls.model_fields.values() if f.alias)
        doc = {k: v for k, v in (attributes or {}).items() if k not in shadowed}
        doc.update(columns)
        return cls.model_validate(doc)

#!/usr/bin/env python3
"""
Purpose:
    Defines the CustomResourceDefinition model (the parts of
    `apiextensions.k8s.io` that sample generation needs) and loaders that
    read CRDs from YAML/JSON files or strings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from crdsample.core.constants import CRD_KIND, DEFAULT_TEXT_ENCODING, SUPPORTED_CRD_EXT
from crdsample.core.errors import CRDLoadError
from crdsample.core.formatting import format_pydantic_errors_simple
from crdsample.core.schema.schema_node import SchemaNode

logger = logging.getLogger(__name__)


# --- Model --- #

class _CRDModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CustomResourceValidation(_CRDModel):
    openapi_v3_schema: Optional[SchemaNode] = Field(default=None, alias="openAPIV3Schema")


class CustomResourceNames(_CRDModel):
    kind: str = Field(...)
    plural: Optional[str] = None
    singular: Optional[str] = None


class CustomResourceVersion(_CRDModel):
    name: str = Field(...)
    served: bool = True
    storage: bool = False
    validation: Optional[CustomResourceValidation] = Field(default=None, alias="schema")


class CustomResourceDefinitionSpec(_CRDModel):
    group: str = Field(...)
    names: CustomResourceNames = Field(...)
    scope: Optional[str] = None
    versions: List[CustomResourceVersion] = Field(default_factory=list)
    # v1beta1: one schema shared by every version
    validation: Optional[CustomResourceValidation] = None

    @model_validator(mode="before")
    @classmethod
    def _promote_single_version(cls, data: Any) -> Any:
        """v1beta1 `spec.version` becomes a one-entry `versions` list when `versions` is absent."""
        if isinstance(data, dict) and not data.get("versions") and data.get("version"):
            data = {**data, "versions": [{"name": data["version"], "served": True, "storage": True}]}
        return data


class CustomResourceDefinition(_CRDModel):
    """
    A parsed CRD.

    Only `spec.group`, `spec.names.kind` and the per-version schemas are
    interpreted; everything else is ignored.
    """

    api_version: Optional[str] = Field(default=None, alias="apiVersion")
    kind: str = Field(default=CRD_KIND)
    spec: CustomResourceDefinitionSpec = Field(...)

    # --- Convenience --- #

    @property
    def group(self) -> str:
        return self.spec.group

    @property
    def resource_kind(self) -> str:
        """Kind of the custom resource this CRD declares (not 'CustomResourceDefinition')."""
        return self.spec.names.kind

    @property
    def versions(self) -> List[CustomResourceVersion]:
        return self.spec.versions

    def schema_for(self, version: CustomResourceVersion) -> SchemaNode:
        """
        Effective root schema of `version`.

        A version's own schema wins over the shared v1beta1 `spec.validation`;
        an empty SchemaNode is returned when neither exists.
        """
        for validation in (version.validation, self.spec.validation):
            if validation is not None and validation.openapi_v3_schema is not None:
                return validation.openapi_v3_schema
        return SchemaNode()


# --- Loading --- #

def parse_crds(text: str, *, source: str = "<string>") -> List[CustomResourceDefinition]:
    """
    Parse every CustomResourceDefinition contained in a YAML (or JSON) string.

    Documents of any other kind and empty documents are skipped.

    Raises:
        CRDLoadError: on YAML syntax errors or when a CRD document fails validation
    """
    try:
        documents = [d for d in yaml.safe_load_all(text) if d is not None]
    except yaml.YAMLError as e:
        raise CRDLoadError(f"Invalid YAML in {source}: {e}") from e
    return _crds_from_documents(documents, source)


def load_crds(path: Union[str, Path]) -> List[CustomResourceDefinition]:
    """
    Load every CustomResourceDefinition from a `.yaml`, `.yml` or `.json` file.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file extension is not supported
        CRDLoadError: if the payload cannot be parsed or validated
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"The file {str(p)!r} does not exist")
    if p.suffix.lower() not in SUPPORTED_CRD_EXT:
        raise ValueError(
            f"Invalid CRD file extension for {p.name!r}; expected one of {sorted(SUPPORTED_CRD_EXT)}"
        )
    text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
    if p.suffix.lower() == ".json":
        try:
            return _crds_from_documents([json.loads(text)], str(p))
        except json.JSONDecodeError as e:
            raise CRDLoadError(f"Invalid JSON in {str(p)!r}: {e.msg} (line {e.lineno}, col {e.colno})") from e
    return parse_crds(text, source=repr(str(p)))


def _crds_from_documents(documents: List[Any], source: str) -> List[CustomResourceDefinition]:
    crds: List[CustomResourceDefinition] = []
    for index, doc in enumerate(documents):
        if not isinstance(doc, dict) or doc.get("kind") != CRD_KIND:
            logger.debug("skipping document %d in %s: not a %s", index, source, CRD_KIND)
            continue
        crds.append(_validate(doc, source, index))
    return crds


def _validate(doc: Dict[str, Any], source: str, index: int) -> CustomResourceDefinition:
    try:
        return CustomResourceDefinition.model_validate(doc)
    except ValidationError as e:
        lines = "\n".join(f"  {m}" for m in format_pydantic_errors_simple(e))
        raise CRDLoadError(f"Invalid CRD (document {index}) in {source}:\n{lines}") from e

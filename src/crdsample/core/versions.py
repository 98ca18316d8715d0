#!/usr/bin/env python3
"""
Purpose:
    Assembles one VersionRecord per CRD version: the sample YAML and the
    property tree, both rendered from a single walk of the version schema.
"""
from __future__ import annotations

import random
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from crdsample.core.config import GenerationOptions
from crdsample.core.property_tree import PropertyDescriptor, describe_fields
from crdsample.core.sample_emitter import SampleEmitter
from crdsample.core.schema.crd import CustomResourceDefinition
from crdsample.core.walker import walk_schema


class VersionRecord(BaseModel):
    """Everything shown for one version of a CRD."""

    model_config = ConfigDict(frozen=True)

    version: str
    kind: str
    group: str
    description: str = ""
    properties: List[PropertyDescriptor] = Field(default_factory=list)
    yaml: str = ""

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"


def build_version_records(
    crd: CustomResourceDefinition,
    options: Optional[GenerationOptions] = None,
    *,
    rng: Optional[random.Random] = None,
) -> List[VersionRecord]:
    """Build a VersionRecord for every version of `crd`, in declaration order."""
    emitter = SampleEmitter(crd.group, crd.resource_kind, options, rng=rng)
    records: List[VersionRecord] = []
    for version in crd.versions:
        root = crd.schema_for(version)
        ctx = emitter.context(version.name)
        fields = walk_schema(root, ctx)
        records.append(VersionRecord(
            version=version.name,
            kind=crd.resource_kind,
            group=crd.group,
            description=root.description,
            properties=describe_fields(fields),
            yaml=emitter.render(fields, ctx),
        ))
    return records

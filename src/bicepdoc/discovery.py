"""🔍 Discovery - Produce model descriptors from source directories.

Scans source directories for:
1. Python files with classes decorated with ``@resource_type(...)``
2. YAML resource manifests (``*.resource.yaml``)

Discovery is a one-shot producer: every call scans again and keeps no state
between runs. Files that fail to load are reported as errors and skipped.

Example manifest:
    resource_type: SecretScope
    annotations:
      - kind: heading
        title: SecretScope
        description: Manages Databricks secret scopes.
      - kind: front_matter
        key: category
        value: Workspace
    properties:
      - name: scope
        description: The name of the scope.
        flags: [Required, Identifier]
"""

from __future__ import annotations

import hashlib
import importlib.util
import inspect
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import ModuleType, NoneType, UnionType
from typing import Any, Literal, Union, get_args, get_origin

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.console import Console

from .annotations import (
    FLAGS_KEY,
    RawAnnotation,
    as_text,
    get_declared_annotations,
    get_resource_type,
)
from .ignore import IgnoreFile
from .models import CapabilityFlags, ModelDescriptor, PropertySchemaEntry

DEFAULT_PATTERNS = ["*.py", "*.resource.yaml"]


class PropertyManifest(BaseModel):
    """A property entry in a YAML resource manifest."""

    name: str
    description: str = ""
    flags: list[str] = Field(default_factory=list)
    values: list[str] = Field(
        default_factory=list, description="Allowed values of an enum-typed property"
    )

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return as_text(v)

    @field_validator("flags", "values", mode="before")
    @classmethod
    def coerce_items(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [as_text(item) for item in v]
        return v

    def to_entry(self) -> PropertySchemaEntry:
        return PropertySchemaEntry(
            name=self.name,
            description=self.description,
            flags=CapabilityFlags(self.flags),
            allowed_values=tuple(self.values),
        )


class ResourceManifest(BaseModel):
    """A resource type declared in YAML instead of Python."""

    resource_type: str = Field(description="Resource type name")
    annotations: list[RawAnnotation] = Field(
        default_factory=list, description="Raw annotations in declaration order"
    )
    properties: list[PropertyManifest] = Field(
        default_factory=list, description="Property schema in declaration order"
    )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "ResourceManifest":
        """Load a manifest from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_descriptor(self, source: str | None = None) -> ModelDescriptor:
        return ModelDescriptor(
            resource_name=self.resource_type,
            annotations=tuple(self.annotations),
            properties=tuple(p.to_entry() for p in self.properties),
            source=source,
        )


@dataclass
class DiscoveryResult:
    """Descriptors found in a scan plus per-file load errors."""

    descriptors: list[ModelDescriptor] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


def describe_class(cls: type, source: str | None = None) -> ModelDescriptor:
    """Build a descriptor for a decorated resource class.

    Annotations are concatenated along the MRO from the furthest base to the
    class itself. Properties come from pydantic ``model_fields`` order; a class
    that is not a pydantic model has no schema.

    Args:
        cls: Class decorated with ``@resource_type``
        source: Where the class was defined

    Returns:
        ModelDescriptor for the class
    """
    name = get_resource_type(cls) or cls.__name__

    annotations = []
    for klass in reversed(cls.__mro__):
        annotations.extend(get_declared_annotations(klass))

    properties = None
    if issubclass(cls, BaseModel):
        properties = tuple(
            _property_from_field(field_name, info)
            for field_name, info in cls.model_fields.items()
        )

    return ModelDescriptor(
        resource_name=name,
        annotations=tuple(annotations),
        properties=properties,
        source=source,
    )


def _property_from_field(field_name: str, info) -> PropertySchemaEntry:
    extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
    return PropertySchemaEntry(
        name=info.alias or field_name,
        description=info.description or "",
        flags=CapabilityFlags(extra.get(FLAGS_KEY, [])),
        allowed_values=allowed_values(info.annotation),
    )


def allowed_values(annotation: Any) -> tuple[str, ...]:
    """Get the permitted values of a ``Literal`` or ``Enum`` annotation.

    Optional wrappers (``Mode | None``) are unwrapped. Enum members contribute
    their value when it is a string, otherwise their name. Any other type has
    no value list.
    """
    origin = get_origin(annotation)
    if origin is Literal:
        return tuple(str(v) for v in get_args(annotation))
    if origin in (Union, UnionType):
        for arg in get_args(annotation):
            if arg is NoneType:
                continue
            values = allowed_values(arg)
            if values:
                return values
        return ()
    if inspect.isclass(annotation) and issubclass(annotation, Enum):
        return tuple(
            m.value if isinstance(m.value, str) else m.name for m in annotation
        )
    return ()


class ModelDiscovery:
    """Find resource model definitions under source directories."""

    def __init__(
        self,
        patterns: Iterable[str] | None = None,
        ignore: IgnoreFile | None = None,
        console: Console | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize discovery.

        Args:
            patterns: File globs to scan (default: *.py, *.resource.yaml)
            ignore: Ignore patterns (default: built-in patterns only)
            console: Rich console for output
            verbose: Print each file as it is loaded
        """
        self.patterns = list(patterns or DEFAULT_PATTERNS)
        self.ignore = ignore or IgnoreFile()
        self.console = console or Console()
        self.verbose = verbose

    def discover(self, source_dirs: Iterable[Path | str]) -> DiscoveryResult:
        """Scan source directories for resource definitions.

        Args:
            source_dirs: Directories to scan recursively

        Returns:
            DiscoveryResult with descriptors in file order
        """
        result = DiscoveryResult()
        result.files = self._find_files(source_dirs)

        if self.verbose:
            self.console.print(f"[dim]Scanning {len(result.files)} file(s)...[/dim]")

        for path in result.files:
            if self.verbose:
                self.console.print(f"[dim]  Loading {path}[/dim]")
            try:
                result.descriptors.extend(self._load_file(path))
            except (ValidationError, yaml.YAMLError) as e:
                result.errors.append(f"Invalid manifest {path}: {e}")
            except Exception as e:
                result.errors.append(f"Failed to load {path}: {e}")

        return result

    def _find_files(self, source_dirs: Iterable[Path | str]) -> list[Path]:
        seen: set[Path] = set()
        files = []
        for source_dir in source_dirs:
            source_dir = Path(source_dir)
            if not source_dir.is_dir():
                continue
            for pattern in self.patterns:
                for path in sorted(source_dir.rglob(pattern)):
                    resolved = path.resolve()
                    if resolved in seen or not path.is_file():
                        continue
                    if self.ignore.is_ignored(resolved.as_posix()):
                        continue
                    seen.add(resolved)
                    files.append(path)
        return files

    def _load_file(self, path: Path) -> list[ModelDescriptor]:
        if path.suffix in (".yaml", ".yml"):
            return [ResourceManifest.from_yaml(path).to_descriptor(str(path))]
        if path.suffix == ".py":
            module = self._import_module(path)
            return self._describe_module(module, str(path))
        return []

    def _import_module(self, path: Path) -> ModuleType:
        """Import a Python file by path under a unique module name."""
        digest = hashlib.sha1(str(path.resolve()).encode()).hexdigest()[:10]
        module_name = f"bicepdoc_models_{path.stem}_{digest}"

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot import {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            sys.modules.pop(module_name, None)
            raise
        return module

    def _describe_module(self, module: ModuleType, source: str) -> list[ModelDescriptor]:
        descriptors = []
        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Only classes defined here; imported ones belong to their own file
            if obj.__module__ != module.__name__:
                continue
            if get_resource_type(obj) is None:
                continue
            descriptors.append(describe_class(obj, source))
        return descriptors


def discover(
    source_dirs: Iterable[Path | str],
    patterns: Iterable[str] | None = None,
    ignore: IgnoreFile | None = None,
) -> DiscoveryResult:
    """Convenience function to scan source directories once."""
    return ModelDiscovery(patterns=patterns, ignore=ignore).discover(source_dirs)

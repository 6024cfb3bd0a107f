"""🧪 Pytest configuration and shared fixtures."""

import pytest

from bicepdoc.annotations import (
    CustomSectionAnnotation,
    DocMetadataAnnotation,
    ExampleAnnotation,
    FrontMatterAnnotation,
    HeadingAnnotation,
)
from bicepdoc.config import get_settings
from bicepdoc.models import CapabilityFlags, ModelDescriptor, PropertySchemaEntry


@pytest.fixture
def directory_descriptor():
    """Descriptor modelled on a workspace Directory resource."""
    return ModelDescriptor(
        resource_name="Directory",
        annotations=(
            FrontMatterAnnotation(key="category", value="Workspace"),
            HeadingAnnotation(
                title="Directory",
                description="Represents a directory in the Databricks workspace.",
            ),
            ExampleAnnotation(
                title="Creating a directory",
                description="This example shows how to create a directory.",
                code="resource directory 'Directory' = {\n  path: '/Users/me/dir'\n}\n",
            ),
            CustomSectionAnnotation(
                title="Notes",
                description="Import the extension before use.",
                body="- item one\n- item two",
            ),
            DocMetadataAnnotation(key="owner", value="workspace-team"),
        ),
        properties=(
            PropertySchemaEntry(
                name="path",
                description="The path of the directory.",
                flags=CapabilityFlags(["Required", "Identifier"]),
            ),
            PropertySchemaEntry(
                name="objectId",
                description="The object id of the directory.",
                flags=CapabilityFlags(["ReadOnly"]),
            ),
        ),
        source="models/directory.py",
    )


@pytest.fixture
def sample_manifest_yaml():
    """Sample YAML resource manifest."""
    return """
resource_type: SecretScope
annotations:
  - kind: heading
    title: SecretScope
    description: Manages Databricks secret scopes.
  - kind: front_matter
    key: category
    value: Workspace
  - kind: example
    title: Basic scope
    description: Creates a scope.
    code: |
      resource scope 'SecretScope' = {
        scope: 'my-scope'
      }
properties:
  - name: scope
    description: The name of the scope.
    flags: [Required, Identifier]
  - name: backendType
    flags: [ReadOnly]
"""


@pytest.fixture
def sample_models_source():
    """Sample Python module declaring resource models with decorators."""
    return '''
from pydantic import BaseModel

from bicepdoc import annotations as doc


@doc.front_matter("category", "Base")
@doc.doc_example("Base example", "Declared on the base.", "base {}")
class DirectoryIdentifiers(BaseModel):
    path: str = doc.type_property("The path of the directory.", "Required", "Identifier")


@doc.resource_type("Directory")
@doc.front_matter("category", "Workspace")
@doc.doc_heading("Directory", "Represents a directory.")
@doc.doc_example("Derived example", "Declared on the resource.", "derived {}")
class Directory(DirectoryIdentifiers):
    object_id: str | None = doc.type_property(
        "The object id.", "ReadOnly", default=None, alias="objectId"
    )
    size: str | None = None
'''


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Isolate tests from BICEPDOC_* environment settings."""
    for name in ("BICEPDOC_CONFIG", "BICEPDOC_MAX_WORKERS", "BICEPDOC_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

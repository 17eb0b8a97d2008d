from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional, Literal

ArtifactKind = Literal[
    "component", "hook", "util", "store", "context", "partial",
    "role", "module", "page",
]
Dialect = Literal["marker", "flat"]


class Artifact(BaseModel):
    """
    A generated unit of source content.
    """
    kind: ArtifactKind
    name: str  # Raw, pre-normalization
    rendered_name: str  # Canonical identifier
    file_paths: List[str] = Field(default_factory=list)
    # Create: a registry/index entry was written. Delete: one was found and removed.
    registered: Optional[bool] = None


class RoleDescriptor(BaseModel):
    """
    Per-role descriptor persisted next to the role directory.

    The registry mutator branches on ``dialect`` instead of re-deriving the
    registry shape from file content.
    """
    name: str
    dialect: Dialect = "marker"
    created_at: datetime = Field(default_factory=datetime.now)


class MutationResult(BaseModel):
    """
    Outcome of a single injector/remover call against one file.
    """
    file_path: str
    operation: Literal["inject", "remove", "append"]
    changed: bool


class FileSnapshot(BaseModel):
    """
    Content of a file before an intent touched it (None if it did not exist).
    """
    file_path: str
    original_content: Optional[str] = None


class Intent(BaseModel):
    """
    A recorded two-step plan (filesystem step + registry step).

    Left on disk while the command runs; deleted on commit. A pending intent
    at the next invocation means the previous one crashed or failed midway.
    """
    intent_id: str
    verb: str
    args: List[str]
    mode: Literal["create", "delete"]
    started_at: datetime = Field(default_factory=datetime.now)
    created_paths: List[str] = Field(default_factory=list)
    snapshots: List[FileSnapshot] = Field(default_factory=list)
    error: Optional[str] = None

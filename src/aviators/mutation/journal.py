"""
IntentJournal: recorded two-step plans for crash detection and recovery.

Every composite command (filesystem step + registry step) writes an intent
before touching anything and deletes it on commit. An intent still on disk
at the next invocation means the previous run failed or was killed midway;
it carries enough to roll a creation back or to resume a deletion.
"""

import hashlib
import json
import shutil
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError

from aviators.exceptions import RecoveryError
from aviators.logging_config import logger
from aviators.schemas import FileSnapshot, Intent
from .editor import FileEditor


class IntentJournal:
    """
    Persistent journal of in-flight commands.

    One JSON file per intent under ``.aviators/intents/``. When disabled,
    intents are still tracked in memory so callers need no special casing,
    but nothing is persisted.
    """

    def __init__(self, intents_dir: Path, enabled: bool = True, editor: Optional[FileEditor] = None):
        """
        Initialize the journal.

        Args:
            intents_dir: Directory holding pending intents
            enabled: Persist intents to disk
            editor: Editor used to restore snapshots
        """
        self.intents_dir = Path(intents_dir)
        self.enabled = enabled
        self.editor = editor or FileEditor()

    def begin(self, verb: str, args: List[str], mode: str) -> Intent:
        """
        Record the start of a command.

        Args:
            verb: Command verb (e.g. ``module``)
            args: Positional arguments as given
            mode: ``create`` (rolled back on recovery) or ``delete`` (resumed)

        Returns:
            The new intent
        """
        started_at = datetime.now()
        seed = json.dumps([verb, args, mode, started_at.isoformat()])
        intent = Intent(
            intent_id=hashlib.sha256(seed.encode('utf-8')).hexdigest()[:16],
            verb=verb,
            args=list(args),
            mode=mode,
            started_at=started_at,
        )
        self._save(intent)
        logger.debug(f"Began intent {intent.intent_id} ({verb} {' '.join(args)})")
        return intent

    def record_created(self, intent: Intent, path: Path) -> None:
        """Record a path before creating it, so a crash right after still lists it."""
        intent.created_paths.append(str(path))
        self._save(intent)

    def snapshot(self, intent: Intent, path: Path) -> None:
        """Record a file's content before its first mutation under this intent."""
        if any(s.file_path == str(path) for s in intent.snapshots):
            return
        content = self.editor.read_raw(path) if path.exists() else None
        intent.snapshots.append(FileSnapshot(file_path=str(path), original_content=content))
        self._save(intent)

    def commit(self, intent: Intent) -> None:
        """Drop a completed intent."""
        self._path(intent.intent_id).unlink(missing_ok=True)
        logger.debug(f"Committed intent {intent.intent_id}")

    def fail(self, intent: Intent, error: str) -> None:
        """Keep an intent pending with the error that interrupted it."""
        intent.error = error
        self._save(intent)
        logger.warning(f"Intent {intent.intent_id} left pending: {error}")

    @contextmanager
    def track(self, verb: str, args: List[str], mode: str) -> Iterator[Intent]:
        """
        Run a command under an intent: committed on success, left pending
        (and re-raised) on any error.
        """
        intent = self.begin(verb, args, mode)
        try:
            yield intent
        except Exception as e:
            self.fail(intent, str(e))
            raise
        self.commit(intent)

    def pending(self) -> List[Intent]:
        """Pending intents, oldest first."""
        if not self.intents_dir.is_dir():
            return []

        intents = []
        for intent_file in self.intents_dir.glob("*.json"):
            try:
                intents.append(Intent.model_validate_json(intent_file.read_text(encoding="utf-8")))
            except (OSError, ValidationError) as e:
                logger.warning(f"Skipping unreadable intent {intent_file}: {e}")
        return sorted(intents, key=lambda i: i.started_at)

    def get(self, intent_id: str) -> Intent:
        """
        Load one pending intent.

        Raises:
            RecoveryError: If no such intent is pending.
        """
        path = self._path(intent_id)
        if not path.exists():
            raise RecoveryError(f"No pending intent {intent_id}")
        return Intent.model_validate_json(path.read_text(encoding="utf-8"))

    def discard(self, intent: Intent) -> None:
        """Forget a pending intent without touching the project."""
        self._path(intent.intent_id).unlink(missing_ok=True)
        logger.info(f"Discarded intent {intent.intent_id}")

    def rollback(self, intent: Intent) -> List[str]:
        """
        Undo a creation: restore snapshots, then remove created paths.

        Returns:
            Paths restored or removed
        """
        touched = []

        for snapshot in intent.snapshots:
            path = Path(snapshot.file_path)
            if snapshot.original_content is None:
                if path.exists():
                    path.unlink()
                    touched.append(snapshot.file_path)
            elif path.parent.is_dir():
                self.editor.atomic_write(path, snapshot.original_content)
                touched.append(snapshot.file_path)

        for created in reversed(intent.created_paths):
            path = Path(created)
            if path.is_dir():
                shutil.rmtree(path)
            elif path.exists():
                path.unlink()
            else:
                continue
            touched.append(created)

        self.commit(intent)
        logger.info(f"Rolled back intent {intent.intent_id}: {len(touched)} path(s)")
        return touched

    def _path(self, intent_id: str) -> Path:
        return self.intents_dir / f"{intent_id}.json"

    def _save(self, intent: Intent) -> None:
        if not self.enabled:
            return
        self.intents_dir.mkdir(parents=True, exist_ok=True)
        self.editor.atomic_write(self._path(intent.intent_id), intent.model_dump_json(indent=2))

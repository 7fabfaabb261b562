"""Generate a reviewable shell script that deletes dead modules."""

from __future__ import annotations

import shlex
from datetime import datetime
from pathlib import Path
from typing import Iterable

from deadwood.cleaner.file_remover import backing_files
from deadwood.models import SOURCE_EXTENSIONS


def generate_deletion_script(
    target_dir: Path,
    module_ids: Iterable[str],
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> str:
    root = Path(target_dir).resolve()
    lines = [
        "#!/bin/bash",
        "",
        "# Generated dead code deletion script",
        f"# Target: {root}",
        f"# Generated: {datetime.now().isoformat()}",
        "",
        "set -e",
        "",
    ]
    for module_id in module_ids:
        files = backing_files(root, module_id, extensions)
        if not files:
            lines.append(f"# {module_id}: no file found, skipped")
            continue
        lines.append(f"# Delete {module_id}")
        lines.extend(f"rm -f -- {shlex.quote(str(path))}" for path in files)
    return "\n".join(lines) + "\n"

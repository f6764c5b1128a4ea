"""Copy content JSON into the public directory so the static site can fetch it."""

import json
import logging
import shutil
from pathlib import Path
from typing import Optional

from config import settings
from contracts import CollectionKind, CopyReport

logger = logging.getLogger(__name__)

# Knowledge first, matching the order the site build expects
COPY_ORDER = (CollectionKind.KNOWLEDGE, CollectionKind.PROJECTS)


def copy_content(
    content_dir: Optional[str] = None,
    public_content_dir: Optional[str] = None,
) -> CopyReport:
    """Copy `content/{knowledge,projects}/*.json` to `public/content/...`.

    Each file is parsed before it is copied; the first unreadable or malformed
    file stops the run and is reported in `CopyReport.error`.
    """
    source_root = Path(content_dir) if content_dir else settings.get_content_path()
    target_root = Path(public_content_dir) if public_content_dir else settings.get_public_content_path()
    report = CopyReport()

    try:
        target_root.mkdir(parents=True, exist_ok=True)
        for kind in COPY_ORDER:
            source = source_root / kind.value
            target = target_root / kind.value
            target.mkdir(parents=True, exist_ok=True)
            logger.info("Copying %s content...", kind.value)

            for path in sorted(source.iterdir()):
                if path.suffix != ".json":
                    continue
                json.loads(path.read_text(encoding="utf-8"))
                shutil.copyfile(path, target / path.name)
                report.copied.append(f"{kind.value}/{path.name}")
                logger.debug("Copied %s", path.name)
    except (OSError, ValueError) as e:
        report.error = f"Error copying content: {e}"
        logger.error(report.error)
        return report

    logger.info("Copied %d content files to %s", len(report.copied), target_root)
    return report

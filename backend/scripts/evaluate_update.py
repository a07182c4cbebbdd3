"""Evaluate an update request against a project snapshot and print the verdict.

Usage:
    python scripts/evaluate_update.py --project project.json --changes changes.json \
        --role unit_head --actor-id 7
"""

import argparse
import json
import sys
import uuid
from pathlib import Path

from lifecycle.core.config import get_settings
from lifecycle.core.exceptions import InvalidSnapshotError
from lifecycle.core.logging import bind_correlation_id, configure_structlog
from lifecycle.domain.roles import Actor
from lifecycle.schemas.project import ProjectSnapshot, ProjectUpdate
from lifecycle.services.update_service import UpdateService


def _load(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--project", required=True, help="JSON file with the project record")
    parser.add_argument("--changes", required=True, help="JSON file with the update payload")
    parser.add_argument("--role", default=None, help="Session role name (e.g. admin, unit_head)")
    parser.add_argument("--actor-id", type=int, default=None, help="Acting user ID")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_structlog(log_level="DEBUG" if settings.debug else settings.log_level, json_logs=not settings.debug)
    bind_correlation_id(str(uuid.uuid4()))

    try:
        snapshot = ProjectSnapshot.parse_payload(_load(args.project))
        update = ProjectUpdate.parse_payload(_load(args.changes))
    except InvalidSnapshotError as e:
        print(str(e), file=sys.stderr)
        return 2

    project = snapshot.to_domain()
    service = UpdateService(settings)
    verdict = service.evaluate_update(Actor.from_session(args.role, args.actor_id), project, update)
    progress = service.progress_for(project)

    print(
        json.dumps(
            {
                **verdict.to_dict(),
                "progress": {"overall": progress.overall, "perPhase": list(progress.per_phase)},
            },
            indent=2,
            default=str,
        )
    )
    return 0 if verdict.all_approved else 1


if __name__ == "__main__":
    sys.exit(main())

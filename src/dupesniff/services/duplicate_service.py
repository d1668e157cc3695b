import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from dupesniff.core.models import ClassifiedPair
from dupesniff.core.resolver import ResolutionPolicy
from dupesniff.services.file_service import FileService

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    deleted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failed)


class DuplicateService:
    @staticmethod
    def files_to_delete(pairs: List[ClassifiedPair], policy: ResolutionPolicy) -> List[str]:
        """
        Resolves every pair and returns the selected paths in pair order,
        each path at most once.
        """
        selected = []
        seen = set()
        for pair in pairs:
            path = policy.resolve(pair).path
            if path not in seen:
                seen.add(path)
                selected.append(path)
        return selected

    @staticmethod
    def delete_resolved(
            pairs: List[ClassifiedPair],
            policy: ResolutionPolicy,
            use_trash: bool = False
    ) -> DeletionReport:
        """
        Deletes the file chosen by the policy for each pair.
        A failure is logged and recorded; the remaining pairs are still processed.

        Args:
            pairs: Duplicate or empty pairs confirmed for deletion.
            policy: Chooses which file of a pair goes.
            use_trash: Move to the system trash instead of removing.

        Returns:
            DeletionReport with deleted paths and (path, error) failures.
        """
        report = DeletionReport()
        for path in DuplicateService.files_to_delete(pairs, policy):
            try:
                FileService.delete_file(path, use_trash=use_trash)
                logger.info(f"Deleted {path}")
                report.deleted.append(path)
            except RuntimeError as e:
                logger.warning(f"Failed to delete {path}: {e}")
                report.failed.append((path, str(e)))
        return report

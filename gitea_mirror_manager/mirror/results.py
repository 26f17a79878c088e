"""Contains results of the mirroring workflow."""

from collections import Counter

from gitea_mirror_manager.mirror.models import MirrorDecision, MirrorTarget, Repository


class IssueMirrorResult:
    """Contains results of replicating the issues of one repository."""

    def __init__(self, total: int, created: int) -> None:
        """Initialize the result with the number of source issues and created issues."""
        self.total = total
        self.created = created


class RepositoryMirrorResult:
    """Contains results of reconciling a single repository."""

    def __init__(
        self,
        repository: Repository,
        target: MirrorTarget | None,
        decision: MirrorDecision,
        issues: IssueMirrorResult | None = None,
    ) -> None:
        """Initialize the result with the repository, its target, and the decision."""
        self.repository = repository
        self.target = target
        self.decision = decision
        self.issues = issues


class MirrorRunResult:
    """Contains results of one complete mirror run."""

    def __init__(self, results: list[RepositoryMirrorResult], collected: int = 0) -> None:
        """Initialize the run result with per-repository results."""
        self.results = results
        self.collected = collected

    def counts(self) -> dict[str, int]:
        """Number of repositories per decision."""
        counter = Counter(result.decision.value for result in self.results)
        return {decision.value: counter.get(decision.value, 0) for decision in MirrorDecision}

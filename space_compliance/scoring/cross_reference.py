"""Cross-regulation references carried by requirements."""

from ..catalog.requirements import Requirement


class CrossReferenceFinder:
    """Flattens cross-references of a requirement list into one ordered list."""

    def find(self, requirements: list[Requirement]) -> list[str]:
        """
        Collect cross-references.

        Returns:
            References in first-seen order, each exact string once
        """
        seen: dict[str, None] = {}
        for requirement in requirements:
            for ref in requirement.cross_references:
                seen.setdefault(ref, None)
        return list(seen)

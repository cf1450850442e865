"""
EAN LogBook Module

Classes:
    LogBook: Record of every tournament of a trial, and of the best genome found
"""

from pathlib import Path
from typing  import TYPE_CHECKING

if TYPE_CHECKING:
    from ean.genotype import Genome

class LogBook:
    """
    One line per tournament, plus a snapshot of the best genome found so far.

    Public Attributes:
        entries:    Tournament records, in the order they were recorded
        best:       Copy of the best genome (None until set by the trial)
        best_score: Score of 'best'

    Public Methods:
        record(genome_id1, genome_id2, score1, score2, best_score): Add a tournament record
        summarize():                                               Print the whole log
        export(path):                                              Write the whole log to a file
    """

    def __init__(self):
        self.entries   : list[str]        = []
        self.best      : 'Genome | None'  = None
        self.best_score: float | None     = None

    def record(self, genome_id1: int, genome_id2: int, score1: float, score2: float, best_score: float) -> str:
        entry = (f"Tournament [{genome_id1} ({score1:.3f}) and {genome_id2} ({score2:.3f})]; "
                 f"Best score: {best_score:.3f}")
        self.entries.append(entry)
        return entry

    def __len__(self):
        return len(self.entries)

    def _lines(self) -> list[str]:
        lines = list(self.entries)
        lines.append("Best Genome:")
        lines.append(str(self.best) if self.best is not None else "None")
        return lines

    def summarize(self) -> None:
        for line in self._lines():
            print(line)

    def export(self, path: str | Path) -> Path:
        """
        Write all tournament records, followed by the best genome, to a text file.

        Parameters:
            path: Destination file (parent directories are created if needed)

        Returns:
            The path of the written file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(self._lines()) + "\n")
        return path

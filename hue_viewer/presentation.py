from __future__ import annotations

from hue_core.scoring import ScoreReport, ScoringMode

TITLE = "Farnsworth-Munsell 100 Hue Test"
INSTRUCTIONS = (
    "Arrange the color tiles in order of hue from left to right. "
    "The first and last tiles are fixed in place."
)


def format_elapsed(elapsed_ms: int) -> str:
    total_seconds = max(0, int(elapsed_ms)) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"Time: {minutes:02d}:{seconds:02d}"


def format_circular_error(error: int) -> str:
    return f"Your error score: {error} (Lower is better)"


def format_inversion_score(report: ScoreReport) -> str:
    return f"Your score: {report.score}/100 ({report.band.value})"


def format_score(report: ScoreReport, primary: ScoringMode) -> str:
    """Headline text for the results panel; the other measure follows it."""

    if ScoringMode(primary) is ScoringMode.CIRCULAR:
        return (
            f"{format_circular_error(report.circular_error)}\n"
            f"Order score: {report.score}/100 ({report.band.value})"
        )
    return (
        f"{format_inversion_score(report)}\n"
        f"Misplaced pairs: {report.inversions} of {report.max_inversions}, "
        f"circular error {report.circular_error}"
    )

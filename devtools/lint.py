import subprocess
from typing import List

from rich import print as rprint

LINT_PATHS = ["notestack", "tests", "devtools"]

LINT_STEPS = [
    ["usort", "format"],
    ["ruff", "check", "--fix"],
    ["black"],
]


def run_step(cmd: List[str]) -> bool:
    rprint(f"[bold green]❯ {' '.join(cmd)}[/bold green]")
    result = subprocess.run(cmd, text=True)
    if result.returncode != 0:
        rprint(f"[bold red]Failed with exit code {result.returncode}[/bold red]")
    rprint()
    return result.returncode == 0


def main() -> int:
    """
    Run every formatter and linter over the package and tests, even if an earlier one
    fails, and report how many failed.
    """
    rprint()
    failures = sum(not run_step(step + LINT_PATHS) for step in LINT_STEPS)

    if failures:
        rprint(f"[bold red]✗ Lint failed: {failures} of {len(LINT_STEPS)} steps.[/bold red]")
    else:
        rprint("[bold green]✔️ Lint passed![/bold green]")
    rprint()

    return failures


if __name__ == "__main__":
    raise SystemExit(main())

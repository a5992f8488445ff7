import runpy
from pathlib import Path

EXAMPLE = Path(__file__).resolve().parents[1] / "apprenticeship_irl" / \
    "examples" / "ex_apprenticeship_corridor.py"


def test_corridor_example_runs(capsys):
    namespace = runpy.run_path(str(EXAMPLE))
    namespace["main"]()
    out = capsys.readouterr().out
    assert "Status:" in out
    assert "Learned trajectory" in out

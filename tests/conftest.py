import pytest

from seqalign.cli import main


@pytest.fixture
def run(capsys):
    """Run the command-line interface and return what it wrote to standard output"""

    def _run(params):
        if type(params) is str:
            params = params.split()
        main(params)
        return capsys.readouterr().out

    return _run

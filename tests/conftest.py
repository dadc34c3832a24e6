import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from dict_enhance.glossary.stack import GlossaryStack
from dict_enhance.glossary.table import GlossaryTable


@pytest.fixture
def make_stack():
    def _make(*tables: tuple[str, dict[str, str]], merge_all: bool = False) -> GlossaryStack:
        return GlossaryStack(
            [GlossaryTable(source_id, pathlib.Path(source_id), entries) for source_id, entries in tables],
            merge_all=merge_all,
        )

    return _make


@pytest.fixture
def make_entry():
    def _make(headword: str, variants: str | None = None, body: str = "") -> str:
        bracket = f"【{variants}】" if variants is not None else ""
        return f'<a name="{headword}" /><b>{headword}</b>{bracket}<p>{body}'

    return _make

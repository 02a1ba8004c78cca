from pathlib import Path

import pytest

from nodetpl import Context
from tests.infrastructure.file_utils import write_document


class CountingContext(Context):
    """Контекст, считающий вызовы push/pop."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.pushes = 0
        self.pops = 0

    def push(self, frame=None):
        self.pushes += 1
        super().push(frame)

    def pop(self):
        self.pops += 1
        return super().pop()


@pytest.fixture
def counting_context():
    return CountingContext


@pytest.fixture
def tmpdoc(tmp_path: Path):
    """Документ с циклом, условием и данными в базовой области."""
    return write_document(
        tmp_path / "doc.yaml",
        """
        context:
          name: Ann
          items: [10, 20, 30]
        nodes:
          - "Hi {{ name }}!"
          - if: "items && name == 'Ann'"
            body: [" ok"]
          - for: {item: items}
            body:
              - " {{ forloop.counter }}:{{ item }}"
        """,
    )

"""
JSX engine test configuration.

Shared JSX fixtures. The engine is pure: no database, no network.
"""

import pytest

TEST_COMPONENT = """
function TestComponent() {
  return (
    <div>
      <h1>Hello World</h1>
      <p>This is a test</p>
    </div>
  );
}
"""


@pytest.fixture
def test_component():
    return TEST_COMPONENT


@pytest.fixture
def sibling_paragraphs():
    return "<div><p>A</p><p>B</p></div>"

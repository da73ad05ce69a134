import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import invoice_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from invoice_toolkit.table import PageMetrics, RecordingSurface, Table


# Common test fixtures
@pytest.fixture
def recording_surface():
    """Letter-size recording surface (10pt font: 6-unit chars, 12-unit lines)."""
    return RecordingSurface()


@pytest.fixture
def small_page_surface():
    """Recording surface on a 200-unit tall page with 20-unit margins (bottom at 180)."""
    return RecordingSurface(
        PageMetrics(width=300, height=200, margin_top=20, margin_bottom=20, margin_left=20, margin_right=20)
    )


@pytest.fixture
def two_column_table():
    """Headers A/B with a single short row."""
    return Table(headers=("A", "B"), rows=(("x", "y"),))

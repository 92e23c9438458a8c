"""
Pytest configuration and shared fixtures

Common fixtures used across multiple test files are defined here.
"""
import sys
import uuid
from pathlib import Path

import pytest

# Add api directory to path for imports
# Detect if running in Docker (./api:/app mount) vs host (./api exists)
api_path = Path(__file__).parent.parent / "api"
if not api_path.exists():
    # Running in Docker where api contents are at /app directly
    api_path = Path(__file__).parent.parent
sys.path.insert(0, str(api_path))

from domain_models import ChannelContext, ContentRecord, PageIdentity  # noqa: E402


# =============================================================================
# Record Builders
# =============================================================================

def make_page(page_id, tree_path, order=None, parent_id=None, level=None):
    """PageIdentity with a GUID derived from the tree path"""
    return PageIdentity(
        id=page_id,
        guid=uuid.uuid5(uuid.NAMESPACE_URL, f"website:{tree_path}"),
        name=tree_path.rstrip("/").rpartition("/")[2],
        tree_path=tree_path,
        order=order,
        parent_id=parent_id,
        level=level if level is not None else len([s for s in tree_path.split("/") if s])
    )


def make_record(content_type, fields=None, page=None, language="en", channel="website",
                published=True, secured=False):
    return ContentRecord(
        content_type=content_type,
        language=language,
        fields=dict(fields or {}),
        channel=channel if page is not None else None,
        page=page,
        published=published,
        secured=secured
    )


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def channel():
    """Live website channel"""
    return ChannelContext(name="website", is_preview=False)


@pytest.fixture
def news_records():
    """A /News section with four articles, a nested archive and a draft"""
    return [
        make_record("Folder", {"Title": "News"}, make_page(10, "/News", order=1, parent_id=0)),
        make_record("Article", {"Title": "Spring opening hours", "PublishDate": "2024-03-01", "Views": 120},
                    make_page(11, "/News/item1", order=1, parent_id=10)),
        make_record("Article", {"Title": "New espresso blend", "PublishDate": "2024-04-15", "Views": 340},
                    make_page(12, "/News/item2", order=2, parent_id=10)),
        make_record("Article", {"Title": "Barista championship", "PublishDate": "2024-05-20", "Views": 95},
                    make_page(13, "/News/item3", order=3, parent_id=10)),
        make_record("Article", {"Title": "Summer cold brew", "PublishDate": "2024-06-10", "Views": 410},
                    make_page(14, "/News/item4", order=4, parent_id=10)),
        make_record("Article", {"Title": "Year in review", "PublishDate": "2023-12-31", "Views": 60},
                    make_page(15, "/News/2023/archive", order=1, parent_id=0)),
        make_record("Article", {"Title": "Autumn draft", "PublishDate": "2024-09-01"},
                    make_page(16, "/News/draft", order=5, parent_id=10), published=False),
        make_record("Article", {"Title": "Neuigkeiten", "PublishDate": "2024-07-01"},
                    make_page(17, "/News/item1", order=1, parent_id=10), language="de"),
    ]


@pytest.fixture
def store(news_records):
    from ingestion import InMemoryContentStore
    return InMemoryContentStore(news_records)


@pytest.fixture
def data_dir():
    """Sample content and schema files shipped with the API"""
    return api_path / "data"

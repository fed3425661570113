"""Shared fixtures: in-memory catalog store, fake extractor, API client."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GEMINI_API_KEY", "test-key")

from decimal import Decimal  # noqa: E402
from typing import AsyncGenerator, List, Tuple  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.domain.entities.analysis import FacialAttributes, TryOnResult  # noqa: E402
from app.domain.entities.frame import FrameProduct  # noqa: E402
from app.domain.entities.vocabulary import StockStatus  # noqa: E402
from app.domain.interfaces.extraction.attribute_extractor import (  # noqa: E402
    AttributeExtractor,
    ImageFetcher,
)
from app.infrastructure.database.models import Base  # noqa: E402
from app.infrastructure.database.unit_of_work import UnitOfWork  # noqa: E402

OVAL_ATTRIBUTES = FacialAttributes(
    face_shape="oval",
    recommended_sizes=["Medium", "Small"],
    recommended_colors=["Gold", "Tortoise"],
    recommended_styles=["Aviator", "Round"],
    confidence=0.9,
    reasoning="Balanced proportions",
)


def make_frame(frame_id: str = "frame", **overrides) -> FrameProduct:
    """Build a frame that matches nothing in OVAL_ATTRIBUTES unless overridden."""
    data = dict(
        id=frame_id,
        name=f"Frame {frame_id}",
        brand="Acme",
        style="Square",
        color="Blue",
        size="Large",
        price=Decimal("100.00"),
        stock_status=StockStatus.OUT_OF_STOCK,
        stock_count=0,
        image_url=f"https://images.test/{frame_id}.jpg",
        suitable_face_shapes=["round"],
        is_active=True,
    )
    data.update(overrides)
    return FrameProduct(**data)


class FakeExtractor(AttributeExtractor):
    """Extractor returning canned attributes and recording its calls."""

    def __init__(self, attributes: FacialAttributes = OVAL_ATTRIBUTES, error: Exception = None):
        self.attributes = attributes
        self.error = error
        self.calls: List[Tuple[bytes, str]] = []
        self.try_on_calls: List[FrameProduct] = []

    async def extract_attributes(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> FacialAttributes:
        self.calls.append((image_bytes, mime_type))
        if self.error:
            raise self.error
        return self.attributes

    async def generate_try_on(self, photo_bytes, photo_mime_type, frame_image_bytes,
                              frame_image_mime_type, frame) -> TryOnResult:
        self.try_on_calls.append(frame)
        return TryOnResult(
            image_base64="Z2VuZXJhdGVk",
            mime_type="image/png",
            description=f"{frame.name} suits you",
            generated=True,
        )


class FakeImageFetcher(ImageFetcher):
    """Image fetcher that never touches the network."""

    def __init__(self):
        self.urls: List[str] = []

    async def fetch(self, url: str) -> Tuple[bytes, str]:
        self.urls.append(url)
        return b"frame-image", "image/jpeg"


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def uow(session_factory) -> AsyncGenerator[UnitOfWork, None]:
    async with session_factory() as session:
        yield UnitOfWork(session)


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def image_fetcher() -> FakeImageFetcher:
    return FakeImageFetcher()


@pytest.fixture
async def client(session_factory, extractor, image_fetcher) -> AsyncGenerator[httpx.AsyncClient, None]:
    """API client wired to the in-memory database and fake collaborators."""
    from app.infrastructure.dependencies import (
        get_attribute_extractor,
        get_image_fetcher,
        get_uow,
    )
    from app.main import app

    async def override_uow():
        async with session_factory() as session:
            async with UnitOfWork(session) as request_uow:
                yield request_uow

    app.dependency_overrides[get_uow] = override_uow
    app.dependency_overrides[get_attribute_extractor] = lambda: extractor
    app.dependency_overrides[get_image_fetcher] = lambda: image_fetcher

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()

"""Demo frames for development catalogs."""
from decimal import Decimal
from typing import List

from app.core.logging import get_logger
from app.domain.entities.frame import FrameProduct, NewFrame
from app.domain.entities.vocabulary import StockStatus
from app.infrastructure.database.unit_of_work import UnitOfWork

logger = get_logger(__name__)

SEED_FRAMES: List[NewFrame] = [
    NewFrame(
        name="Classic Aviator",
        brand="Ray-Ban",
        style="Aviator",
        color="Gold",
        size="Medium",
        price=Decimal("189.99"),
        stock_status=StockStatus.IN_STOCK,
        stock_count=25,
        image_url="https://images.unsplash.com/photo-1511499767150-a48a237f0083?w=300&h=300&fit=crop",
        description="Timeless aviator design with gold frame and green lenses",
        features={"material": "metal", "lens_type": "polarized", "weight": "lightweight"},
        suitable_face_shapes=["oval", "square", "heart"],
    ),
    NewFrame(
        name="Wayfarer Black",
        brand="Ray-Ban",
        style="Rectangle",
        color="Black",
        size="Large",
        price=Decimal("159.99"),
        stock_status=StockStatus.IN_STOCK,
        stock_count=18,
        image_url="https://images.unsplash.com/photo-1574258495973-f010dfbb5371?w=300&h=300&fit=crop",
        description="Classic black wayfarer style perfect for any occasion",
        features={"material": "acetate", "lens_type": "standard", "weight": "medium"},
        suitable_face_shapes=["round", "oval", "diamond"],
    ),
    NewFrame(
        name="Round Vintage",
        brand="Oliver Peoples",
        style="Round",
        color="Tortoise",
        size="Small",
        price=Decimal("299.99"),
        stock_status=StockStatus.IN_STOCK,
        stock_count=12,
        image_url="https://images.unsplash.com/photo-1509695507497-903c140c43b0?w=300&h=300&fit=crop",
        description="Vintage-inspired round frames in classic tortoise pattern",
        features={"material": "acetate", "lens_type": "anti_glare", "weight": "lightweight"},
        suitable_face_shapes=["square", "heart", "oblong"],
    ),
    NewFrame(
        name="Modern Square",
        brand="Warby Parker",
        style="Square",
        color="Blue",
        size="Medium",
        price=Decimal("95.99"),
        stock_status=StockStatus.LOW_STOCK,
        stock_count=3,
        image_url="https://images.unsplash.com/photo-1556306510-c0b89e82e72e?w=300&h=300&fit=crop",
        description="Contemporary square frames in stylish blue",
        features={"material": "acetate", "lens_type": "blue_light", "weight": "lightweight"},
        suitable_face_shapes=["round", "oval"],
    ),
    NewFrame(
        name="Cat-Eye Classic",
        brand="Tom Ford",
        style="Cat-eye",
        color="Black",
        size="Small",
        price=Decimal("450.00"),
        stock_status=StockStatus.IN_STOCK,
        stock_count=8,
        image_url="https://images.unsplash.com/photo-1586953208448-b95a79798f07?w=300&h=300&fit=crop",
        description="Elegant cat-eye frames for a sophisticated look",
        features={"material": "acetate", "lens_type": "standard", "weight": "medium"},
        suitable_face_shapes=["heart", "diamond", "oval"],
    ),
]


async def seed_frames(uow: UnitOfWork) -> List[FrameProduct]:
    """Insert the demo frames in order; the caller owns the transaction.

    Args:
        uow: Unit of work to write through

    Returns:
        List[FrameProduct]: Created frames
    """
    created = []
    for new_frame in SEED_FRAMES:
        created.append(await uow.frames.create(new_frame))
    logger.info("Seeded demo frames", count=len(created))
    return created

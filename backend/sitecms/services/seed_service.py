"""
SiteCMS Backend: Seed Loader
=============================

What:  Puts default content into empty collections and keeps the built-in
       administrator account an administrator.
When:  Once per startup, after the schema manager.

Steps (each one checked independently):
    1. Admin account: insert `admin` if absent, otherwise force its role
       back to "admin" (undoes a manual demotion).
    2. Services: insert the default list when the table is empty.
    3. Team: insert the default list when the table is empty.

Transactions:
    Every step runs in its own transaction (`session.begin()`), so the
    check and the write of a step commit together or not at all. Steps are
    not grouped: if the process dies after step 2, the next startup finds
    services populated and only seeds the team.

A collection emptied by an editor is seeded again on the next startup.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sitecms.models.user import ADMIN_ROLE
from sitecms.repositories.services import ServiceRepository
from sitecms.repositories.team import TeamRepository
from sitecms.repositories.users import UserRepository

logger = logging.getLogger(__name__)

# ── Default Content ───────────────────────────────────────────────────────

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "123456"
ADMIN_NAME = "Administrator"

DEFAULT_SERVICES: List[Dict[str, str]] = [
    {
        "icon": "Leaf",
        "title": "Môi trường & Năng lượng",
        "description": "Tư vấn tuân thủ quy định môi trường, đánh giá tác động và phát triển dự án năng lượng tái tạo.",
    },
    {
        "icon": "Globe",
        "title": "Du lịch & Khách sạn",
        "description": "Hỗ trợ pháp lý toàn diện cho các dự án nghỉ dưỡng, khách sạn và kinh doanh lữ hành quốc tế.",
    },
    {
        "icon": "Building2",
        "title": "Bất động sản & Xây dựng",
        "description": "Tư vấn pháp lý dự án, giao dịch mua bán, sáp nhập và giải quyết tranh chấp xây dựng.",
    },
    {
        "icon": "Briefcase",
        "title": "Tư vấn Doanh nghiệp",
        "description": "Thành lập, tái cấu trúc, M&A và quản trị nội bộ doanh nghiệp theo chuẩn mực quốc tế.",
    },
    {
        "icon": "Gavel",
        "title": "Tranh tụng & Giải quyết",
        "description": "Đại diện tham gia tố tụng tại Tòa án và Trọng tài thương mại với chiến lược hiệu quả.",
    },
    {
        "icon": "Scale",
        "title": "Sở hữu trí tuệ",
        "description": "Đăng ký bảo hộ, li-xăng và xử lý vi phạm quyền sở hữu trí tuệ cho thương hiệu.",
    },
]

DEFAULT_TEAM: List[Dict[str, str]] = [
    {
        "name": "LS. Lê Văn Tài",
        "title": "Giám đốc điều hành",
        "image": "https://images.unsplash.com/photo-1560250097-0b93528c311a?q=80&w=1974&auto=format&fit=crop",
    },
    {
        "name": "Mrs. Phạm Thị Mỹ Linh",
        "title": "Trưởng ban Quan hệ khách hàng",
        "image": "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2?q=80&w=1976&auto=format&fit=crop",
    },
    {
        "name": "LS. Lê Văn C",
        "title": "Luật sư cao cấp",
        "image": "https://images.unsplash.com/photo-1519085360753-af0119f7cbe7?q=80&w=1974&auto=format&fit=crop",
    },
]


@dataclass
class SeedReport:
    """What a seeding run changed; logged at startup and asserted in tests."""

    admin_created: bool = False
    services_seeded: int = 0
    team_seeded: int = 0
    steps: List[str] = field(default_factory=list)


async def ensure_admin(session: AsyncSession) -> bool:
    """
    Step 1. Returns True when the admin account had to be created.
    """
    users = UserRepository(session)
    existing = await users.get_by_username(ADMIN_USERNAME)
    if existing is None:
        await users.create_user(
            username=ADMIN_USERNAME,
            password=ADMIN_PASSWORD,
            name=ADMIN_NAME,
            role=ADMIN_ROLE,
        )
        logger.info("Seeded admin user")
        return True

    await users.set_role(ADMIN_USERNAME, ADMIN_ROLE)
    return False


async def seed_services(session: AsyncSession) -> int:
    """Step 2. Returns the number of services inserted (0 when not empty)."""
    services = ServiceRepository(session)
    if await services.count() > 0:
        return 0
    for item in DEFAULT_SERVICES:
        await services.create(title=item["title"], description=item["description"], icon=item["icon"])
    logger.info("Seeded services")
    return len(DEFAULT_SERVICES)


async def seed_team(session: AsyncSession) -> int:
    """Step 3. Returns the number of team members inserted (0 when not empty)."""
    team = TeamRepository(session)
    if await team.count() > 0:
        return 0
    for item in DEFAULT_TEAM:
        await team.create(name=item["name"], title=item["title"], image=item["image"])
    logger.info("Seeded team")
    return len(DEFAULT_TEAM)


async def seed_defaults(session_factory: async_sessionmaker[AsyncSession]) -> SeedReport:
    """
    Run the three seeding steps, each in its own transaction.

    Args:
        session_factory: Factory bound to the engine whose schema is already
                         set up (see schema_service.ensure_schema).
    """
    report = SeedReport()

    async with session_factory() as session:
        async with session.begin():
            report.admin_created = await ensure_admin(session)
        report.steps.append("admin")

        async with session.begin():
            report.services_seeded = await seed_services(session)
        report.steps.append("services")

        async with session.begin():
            report.team_seeded = await seed_team(session)
        report.steps.append("team")

    return report

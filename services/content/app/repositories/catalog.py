from typing import List

from services.content.app import defaults
from shared.schemas.content import GalleryAlbum, PrintEdition, TeamMember, Video


class CatalogRepository:
    """Read-only static content: print editions, staff, albums and videos."""

    async def print_editions(self) -> List[PrintEdition]:
        return [e.model_copy(deep=True) for e in defaults.PRINT_EDITIONS]

    async def team_members(self) -> List[TeamMember]:
        return [m.model_copy(deep=True) for m in defaults.TEAM_MEMBERS]

    async def gallery_albums(self) -> List[GalleryAlbum]:
        return [a.model_copy(deep=True) for a in defaults.GALLERY_ALBUMS]

    async def videos(self) -> List[Video]:
        return [v.model_copy(deep=True) for v in defaults.VIDEOS]

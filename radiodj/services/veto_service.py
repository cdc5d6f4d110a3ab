"""Veto service."""
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..metrics import radio_vetoes_total
from ..models import Track, User, Veto
from ..producers.kafka_producer import publish_veto

logger = get_logger(__name__)


class VetoService:
    """Service recording listener vetoes.

    A listener holds at most one veto per track; vetoing a track again when
    it comes back into rotation reuses the existing record. New vetoes are
    held in ``pending`` until ``publish`` runs after the commit.
    """

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db
        self.pending: List[Veto] = []

    async def get_veto(self, user_id: UUID, track_id: UUID):
        query = select(Veto).where(Veto.user_id == user_id, Veto.track_id == track_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def record(self, radio_id: UUID, user: User, track: Track) -> Veto:
        """Record ``user``'s veto of ``track``."""
        veto = await self.get_veto(user.id, track.id)
        if veto is not None:
            logger.info("veto_already_recorded", user_id=str(user.id), track_id=str(track.id))
            return veto

        veto = Veto(user_id=user.id, track_id=track.id)
        self.db.add(veto)
        await self.db.flush()
        self.pending.append(veto)

        logger.info("veto_recorded", radio_id=str(radio_id), user_id=str(user.id), track_id=str(track.id))
        return veto

    def publish(self, radio_id: UUID) -> int:
        """Count and announce vetoes recorded since the last publish."""
        published = 0
        while self.pending:
            veto = self.pending.pop(0)
            radio_vetoes_total.labels(radio_id=str(radio_id)).inc()
            publish_veto(radio_id=radio_id, track_id=veto.track_id, user_id=veto.user_id)
            published += 1
        return published

    async def vetoes_for_user(self, user_id: UUID) -> List[Veto]:
        query = select(Veto).where(Veto.user_id == user_id).order_by(Veto.created_at)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def vetoes_for_track(self, track_id: UUID) -> List[Veto]:
        query = select(Veto).where(Veto.track_id == track_id).order_by(Veto.created_at)
        result = await self.db.execute(query)
        return list(result.scalars().all())

# =============================================================================
# PlantScan Backend
# services/repository.py - Scan Persistence
#
# Stores completed health reports in the owning user's scan history. Each
# scan is keyed by its client-generated scan_id, so repeated or concurrent
# saves of one scan leave a single record.
# =============================================================================

import json
import logging
from typing import Optional, Tuple, Dict, Any

from sqlalchemy.exc import IntegrityError

from plantscan.extensions import db
from plantscan.models import ScanRecord

# Configure logging
logger = logging.getLogger(__name__)


class ScanRepository:
    """
    Per-user scan history backed by the ``scans`` table.

    Args:
        session: SQLAlchemy session (defaults to the Flask-SQLAlchemy session)
    """

    def __init__(self, session=None):
        self.session = session or db.session

    # =========================================================================
    # Writes
    # =========================================================================

    def save(self, report, user_id: int, image_url: Optional[str] = None) -> Tuple[ScanRecord, bool]:
        """
        Persist a report for a user.

        Args:
            report: HealthReport to store
            user_id: Owner of the scan
            image_url: Hosted image URL (defaults to the report's reference)

        Returns:
            Tuple of (record, created). ``created`` is False when the scan
            had already been saved.
        """
        existing = self.get(user_id, report.scan_id)
        if existing is not None:
            logger.info(f"Scan {report.scan_id} already saved for user {user_id}")
            return existing, False

        payload = report.to_dict()
        record = ScanRecord(
            scan_id=report.scan_id,
            user_id=user_id,
            label=report.label,
            plant_name=report.plant_name,
            scientific_name=report.scientific_name,
            confidence=report.confidence,
            is_healthy=report.is_healthy,
            overall_health=report.overall_health,
            has_pests=bool(report.pests),
            disease_ids=json.dumps([d.id for d in report.diseases]),
            pest_ids=json.dumps([p.id for p in report.pests]),
            condition_names=json.dumps(
                [d.name for d in report.diseases] + [p.name for p in report.pests]
            ),
            report=json.dumps(payload),
            image_url=image_url or report.image_reference,
            scan_date=report.scan_date
        )

        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError:
            # Another request stored the same scan_id first
            self.session.rollback()
            existing = self.get(user_id, report.scan_id)
            if existing is None:
                raise
            logger.info(f"Scan {report.scan_id} saved concurrently; using existing record")
            return existing, False

        logger.info(f"Scan saved: ID={record.id}, scan_id={record.scan_id}, user={user_id}")
        return record, True

    def update_notes(self, user_id: int, scan_id: str, notes: Optional[str]) -> Optional[ScanRecord]:
        record = self.get(user_id, scan_id)
        if record is None:
            return None
        record.notes = notes
        self.session.commit()
        return record

    def delete(self, user_id: int, scan_id: str) -> bool:
        record = self.get(user_id, scan_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        logger.info(f"Scan deleted: scan_id={scan_id}, user={user_id}")
        return True

    # =========================================================================
    # Reads
    # =========================================================================

    def _scans(self):
        return self.session.query(ScanRecord)

    def get(self, user_id: int, scan_id: str) -> Optional[ScanRecord]:
        return self._scans().filter_by(user_id=user_id, scan_id=scan_id).first()

    def count(self, user_id: int) -> int:
        return self._scans().filter_by(user_id=user_id).count()

    def query(self, user_id: int, status: str = 'all', search: Optional[str] = None,
              limit: Optional[int] = None):
        """
        Build the history query for a user, newest first.

        Args:
            user_id: Owner of the scans
            status: all, healthy, unhealthy or pest
            search: Case-insensitive match on plant, disease or pest names
            limit: Only consider the ``limit`` most recent scans

        Returns:
            SQLAlchemy query
        """
        query = self._scans().filter_by(user_id=user_id)

        if limit is not None:
            recent_ids = [
                row.id for row in query.order_by(ScanRecord.created_at.desc(), ScanRecord.id.desc())
                .with_entities(ScanRecord.id)
                .limit(limit)
                .all()
            ]
            query = query.filter(ScanRecord.id.in_(recent_ids))

        if status == 'healthy':
            query = query.filter(ScanRecord.is_healthy.is_(True))
        elif status == 'unhealthy':
            query = query.filter(ScanRecord.is_healthy.is_(False))
        elif status == 'pest':
            query = query.filter(ScanRecord.has_pests.is_(True))

        if search:
            pattern = f'%{search}%'
            query = query.filter(db.or_(
                ScanRecord.plant_name.ilike(pattern),
                ScanRecord.condition_names.ilike(pattern)
            ))

        return query.order_by(ScanRecord.created_at.desc(), ScanRecord.id.desc())

    def stats(self, user_id: int) -> Dict[str, Any]:
        """Counts by plant and label plus health figures for a user."""
        total = self.count(user_id)

        plants_query = self.session.query(
            ScanRecord.plant_name,
            db.func.count(ScanRecord.id)
        ).filter_by(user_id=user_id).group_by(ScanRecord.plant_name).all()

        label_query = self.session.query(
            ScanRecord.label,
            db.func.count(ScanRecord.id).label('count')
        ).filter_by(user_id=user_id, is_healthy=False)\
         .group_by(ScanRecord.label)\
         .order_by(db.desc('count'))\
         .limit(5).all()

        average_health = self.session.query(
            db.func.avg(ScanRecord.overall_health)
        ).filter_by(user_id=user_id).scalar()

        healthy_count = self._scans().filter_by(user_id=user_id, is_healthy=True).count()

        return {
            'total_scans': total,
            'healthy_count': healthy_count,
            'unhealthy_count': total - healthy_count,
            'pest_count': self._scans().filter_by(user_id=user_id, has_pests=True).count(),
            'by_plant': {plant: count for plant, count in plants_query},
            'top_conditions': [{'label': label, 'count': count} for label, count in label_query],
            'average_health': round(float(average_health), 1) if average_health is not None else None
        }

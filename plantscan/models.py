# =============================================================================
# PlantScan Backend
# models.py - Database Models
#
# SQLAlchemy ORM models for the application database.
# Includes User model for authentication/subscriptions and ScanRecord for
# storing each user's scan history.
# =============================================================================

import json
from datetime import datetime, timezone

from plantscan.extensions import db


class User(db.Model):
    """
    User model for authentication, authorization and subscriptions.

    Related to ScanRecord through one-to-many relationship.
    """
    __tablename__ = 'users'

    # Primary Key
    id = db.Column(db.Integer, primary_key=True)

    # Authentication Fields
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Profile Fields
    first_name = db.Column(db.String(50), nullable=True)
    last_name = db.Column(db.String(50), nullable=True)
    phone = db.Column(db.String(20), nullable=True)

    # Account Status
    is_active = db.Column(db.Boolean, default=True)

    # Subscription
    subscription_tier = db.Column(db.String(20), default='free', nullable=False)
    subscription_status = db.Column(db.String(20), default='active', nullable=False)
    subscription_expiry = db.Column(db.DateTime, nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )
    last_login = db.Column(db.DateTime, nullable=True)

    # Relationships
    scans = db.relationship(
        'ScanRecord',
        backref='user',
        lazy='dynamic',
        cascade='all, delete-orphan'
    )

    def to_dict(self, include_email=True):
        """
        Serialize user object to dictionary for API responses.

        Args:
            include_email: Whether to include email in response (privacy)

        Returns:
            dict: User data dictionary
        """
        data = {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'full_name': f"{self.first_name or ''} {self.last_name or ''}".strip(),
            'is_active': self.is_active,
            'subscription_tier': self.subscription_tier,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'last_login': self.last_login.isoformat() if self.last_login else None
        }

        if include_email:
            data['email'] = self.email

        return data

    def __repr__(self):
        return f'<User {self.email}>'


class ScanRecord(db.Model):
    """
    One persisted plant scan.

    ``scan_id`` is generated by the client and is unique per user, so
    repeated saves of the same scan resolve to the same row. The full report
    is kept as JSON alongside a few denormalized columns used for filtering.
    """
    __tablename__ = 'scans'

    # Primary Key
    id = db.Column(db.Integer, primary_key=True)

    # Idempotency key
    scan_id = db.Column(db.String(64), nullable=False)

    # Owner
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('users.id'),
        nullable=False,
        index=True
    )

    # Classification Results
    label = db.Column(db.String(120), nullable=False)
    plant_name = db.Column(db.String(100), nullable=False, index=True)
    scientific_name = db.Column(db.String(120), nullable=True)
    confidence = db.Column(db.Float, nullable=False)
    is_healthy = db.Column(db.Boolean, nullable=False, default=True)
    overall_health = db.Column(db.Integer, nullable=False)
    has_pests = db.Column(db.Boolean, nullable=False, default=False)

    # Condition names and ids stored as JSON strings
    disease_ids = db.Column(db.Text, nullable=True)
    pest_ids = db.Column(db.Text, nullable=True)
    condition_names = db.Column(db.Text, nullable=True)

    # Full report payload
    report = db.Column(db.Text, nullable=False)

    # Image
    image_url = db.Column(db.Text, nullable=True)

    # Metadata
    notes = db.Column(db.Text, nullable=True)

    # Timestamps: scan_date comes from the client, created_at from the server
    scan_date = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        nullable=False,
        index=True
    )
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    # Indexes for common queries
    __table_args__ = (
        db.UniqueConstraint('user_id', 'scan_id', name='uq_scans_user_scan'),
        db.Index('idx_scans_user_created', 'user_id', 'created_at'),
    )

    def report_dict(self):
        return json.loads(self.report) if self.report else {}

    def to_dict(self, include_report=False):
        """
        Serialize scan record to dictionary for API responses.

        Args:
            include_report: Whether to include the full stored report

        Returns:
            dict: Scan data dictionary
        """
        data = {
            'id': self.id,
            'scan_id': self.scan_id,
            'label': self.label,
            'plant_name': self.plant_name,
            'scientific_name': self.scientific_name,
            'confidence': self.confidence,
            'is_healthy': self.is_healthy,
            'overall_health': self.overall_health,
            'diseases': json.loads(self.disease_ids) if self.disease_ids else [],
            'pests': json.loads(self.pest_ids) if self.pest_ids else [],
            'image_url': self.image_url,
            'notes': self.notes,
            'scan_date': self.scan_date.isoformat() if self.scan_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

        if include_report:
            data['report'] = self.report_dict()

        return data

    def __repr__(self):
        return f'<ScanRecord {self.scan_id}: {self.plant_name} ({self.label})>'

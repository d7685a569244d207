# =============================================================================
# PlantScan Backend
# init_db.py - Database Initialization Script
#
# Creates the tables and seeds demo accounts for both subscription tiers.
# Usage:
#   python -m plantscan.init_db                  # create tables + demo users
#   python -m plantscan.init_db --reset          # drop everything first
#   python -m plantscan.init_db --export-labels  # write models/class_labels.json
# =============================================================================

import os
import sys
import json
from datetime import datetime, timedelta, timezone

from plantscan.app import create_app
from plantscan.extensions import db, bcrypt
from plantscan.knowledge import default_label_map
from plantscan.models import User

DEMO_ACCOUNTS = [
    {
        'email': 'demo@plantscan.app',
        'password': 'Demo1234!',
        'first_name': 'Demo',
        'last_name': 'Grower',
        'subscription_tier': 'free'
    },
    {
        'email': 'premium@plantscan.app',
        'password': 'Premium1234!',
        'first_name': 'Premium',
        'last_name': 'Grower',
        'subscription_tier': 'premium'
    }
]


def seed_demo_users(days=30):
    """
    Create the demo accounts if missing.

    Returns:
        list: Emails of the accounts created
    """
    created = []
    for account in DEMO_ACCOUNTS:
        if User.query.filter_by(email=account['email']).first():
            print(f"✓ User '{account['email']}' already exists")
            continue

        premium = account['subscription_tier'] == 'premium'
        user = User(
            email=account['email'],
            password_hash=bcrypt.generate_password_hash(account['password']).decode('utf-8'),
            first_name=account['first_name'],
            last_name=account['last_name'],
            is_active=True,
            subscription_tier=account['subscription_tier'],
            subscription_status='active',
            subscription_expiry=datetime.now(timezone.utc) + timedelta(days=days) if premium else None
        )
        db.session.add(user)
        created.append(account['email'])
        print(f"✓ User '{account['email']}' created ({account['subscription_tier']})")

    db.session.commit()
    return created


def export_labels(path):
    """Write the built-in class label mapping as a class_labels.json file."""
    labels = [item.to_dict() for item in default_label_map().values()]

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump({'labels': labels}, f, indent=2, ensure_ascii=False)

    print(f"✓ Wrote {len(labels)} labels to {path}")


def init_database(app=None):
    """
    Create all tables and seed the demo accounts.
    """
    app = app or create_app()

    with app.app_context():
        db.create_all()
        print("✓ Database tables created successfully")

        seed_demo_users(days=app.config.get('PREMIUM_DURATION_DAYS', 30))

        print("\n" + "=" * 50)
        print("Database initialization completed successfully!")
        print("=" * 50)
        print("\nDemo credentials:")
        for account in DEMO_ACCOUNTS:
            print(f"  {account['subscription_tier']:<8} {account['email']} / {account['password']}")
        print("\n⚠️  Remove the demo accounts in production!")


def reset_database():
    """
    Drop all tables and reinitialize the database.

    WARNING: This will delete all data!
    """
    app = create_app()

    confirm = input("⚠️  This will DELETE ALL DATA. Type 'yes' to confirm: ")
    if confirm.lower() != 'yes':
        print("Operation cancelled")
        return

    with app.app_context():
        db.drop_all()
        print("✓ All tables dropped")

    init_database(app)


if __name__ == '__main__':
    if len(sys.argv) > 1 and sys.argv[1] == '--reset':
        reset_database()
    elif len(sys.argv) > 1 and sys.argv[1] == '--export-labels':
        app = create_app()
        export_labels(os.path.join(app.config['MODEL_PATH'], app.config['CLASS_LABELS_FILE']))
    else:
        init_database()

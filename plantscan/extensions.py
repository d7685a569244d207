# =============================================================================
# PlantScan Backend
# extensions.py - Flask Extensions Initialization
#
# Extensions are created here without the app instance to prevent circular
# imports, then bound to the app in the factory.
# =============================================================================

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Scan history and user accounts
db = SQLAlchemy()

# Alembic migrations for the scans/users schema
migrate = Migrate()

# Stateless auth; identities are stringified user ids
jwt = JWTManager()

bcrypt = Bcrypt()

cors = CORS()

# Limits are per remote address; defaults come from RATELIMIT_DEFAULT
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    strategy="fixed-window"
)

"""
PlantScan - Shared Constants
Common constants used by the analysis pipeline, models and routes
"""

# =============================================================================
# Feature Extraction
# =============================================================================
FEATURE_VECTOR_LENGTH = 10
FEATURE_STEP = 31
FEATURE_BUCKETS = 100

# =============================================================================
# Confidence
# =============================================================================
MIN_CONFIDENCE = 0.70
MAX_CONFIDENCE = 0.99

# =============================================================================
# Severity Levels
# =============================================================================
SEVERITY_LEVELS = ['low', 'medium', 'high', 'critical']

# Health points removed from the baseline for each detected condition
HEALTHY_BASELINE = 95
SEVERITY_PENALTIES = {
    'low': 15,
    'medium': 30,
    'high': 45,
    'critical': 65
}
PEST_PENALTY = 15

# Lower bound of each severity band, checked from the top down
HEALTH_SEVERITY_BANDS = [
    (80, 'low'),
    (60, 'medium'),
    (40, 'high'),
    (0, 'critical')
]

SEVERITY_COLORS = {
    'low': '#4CAF50',       # Green
    'medium': '#FFC107',    # Amber
    'high': '#FF9800',      # Orange
    'critical': '#F44336'   # Red
}

# =============================================================================
# Knowledge Base Enumerations
# =============================================================================
TREATMENT_METHODS = ['chemical', 'organic', 'cultural', 'biological']
PEST_TYPES = ['insect', 'fungus', 'bacteria', 'virus', 'mite', 'nematode']

# =============================================================================
# History Filters
# =============================================================================
HISTORY_STATUS_FILTERS = ['all', 'healthy', 'unhealthy', 'pest']

# =============================================================================
# Subscriptions
# =============================================================================
SUBSCRIPTION_TIERS = ['free', 'premium']
SUBSCRIPTION_STATUSES = ['active', 'inactive', 'expired']

SUBSCRIPTION_PLANS = [
    {
        'id': 'free',
        'name': 'Free Plan',
        'price': 0,
        'tier': 'free',
        'features': [
            'Basic plant identification',
            'Plant name display',
            'Limited scan history',
            'Community access'
        ]
    },
    {
        'id': 'premium',
        'name': 'Premium Plan',
        'price': 9.99,
        'tier': 'premium',
        'features': [
            'Full plant identification',
            'Complete disease analysis',
            'Detailed treatment guides',
            'Prevention strategies',
            'Pest identification',
            'Unlimited scan history',
            'Priority support',
            'Ad-free experience'
        ]
    }
]

# =============================================================================
# API Response Messages
# =============================================================================
MESSAGES = {
    'ANALYSIS_SUCCESS': 'Plant scan completed successfully',
    'ANALYSIS_FAILED': 'Failed to analyze plant image',
    'INVALID_IMAGE': 'Invalid or corrupt image file',
    'UPLOAD_ERROR': 'Error uploading image to the image host',
    'PREMIUM_REQUIRED': 'A premium subscription is required for this feature'
}

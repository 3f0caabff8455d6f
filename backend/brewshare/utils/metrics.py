"""Prometheus metrics configuration"""

from prometheus_client import Counter, Info
from prometheus_fastapi_instrumentator import Instrumentator

from ..config import settings

# Application info
app_info = Info('brewshare', 'Brewshare backend information')
app_info.info({
    'version': settings.VERSION,
    'service': 'brewshare-backend'
})

# Authentication metrics
logins_total = Counter(
    'brewshare_logins_total',
    'Login attempts',
    ['outcome']
)

# Engagement metrics
cheer_toggles_total = Counter(
    'brewshare_cheer_toggles_total',
    'Cheer toggles',
    ['action']
)

comments_created_total = Counter(
    'brewshare_comments_created_total',
    'Comments created'
)

# Relationship metrics
friend_link_changes_total = Counter(
    'brewshare_friend_link_changes_total',
    'Friend link additions and removals',
    ['action']
)

users_deleted_total = Counter(
    'brewshare_users_deleted_total',
    'Users removed through the deletion cascade'
)


def setup_metrics(app):
    """
    Setup Prometheus metrics for FastAPI app

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics"],
        env_var_name="ENABLE_METRICS",
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True
    )

    instrumentator.instrument(app).expose(app, endpoint="/metrics")

    return instrumentator


def record_login(outcome: str):
    """Record a login attempt ("success" or "failure")"""
    logins_total.labels(outcome=outcome).inc()


def record_cheer_toggle(cheered: bool):
    """Record a cheer toggle"""
    cheer_toggles_total.labels(action="cheer" if cheered else "uncheer").inc()


def record_comment():
    """Record comment creation"""
    comments_created_total.inc()


def record_friend_link(action: str):
    """Record a friend link change ("add" or "remove")"""
    friend_link_changes_total.labels(action=action).inc()


def record_user_deleted():
    """Record a completed user deletion"""
    users_deleted_total.inc()

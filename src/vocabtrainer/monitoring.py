"""Monitoring configuration for the trainer."""
from prometheus_client import Counter, Gauge, start_http_server

# Learning metrics
learning_events = Counter(
    "vocabtrainer_learning_events_total",
    "Total number of learning events applied by the scheduler",
    ["event_type"],
)

streak_days = Gauge(
    "vocabtrainer_streak_days",
    "Current consecutive study day streak",
)

# Achievement metrics
achievements_unlocked = Counter(
    "vocabtrainer_achievements_unlocked_total",
    "Total number of achievements unlocked",
    ["achievement_id"],
)

condition_errors = Counter(
    "vocabtrainer_condition_errors_total",
    "Total number of achievement conditions that failed to evaluate",
    ["achievement_id"],
)

# Database metrics
db_operations = Counter(
    "vocabtrainer_db_operations_total",
    "Total number of store write operations",
    ["operation_type"],
)

db_errors = Counter(
    "vocabtrainer_db_errors_total",
    "Total number of store write errors",
    ["error_type"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)

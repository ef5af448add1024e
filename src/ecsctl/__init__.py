"""ecsctl: inspect and connect into containers running on Amazon ECS."""

__version__ = "0.1.0"

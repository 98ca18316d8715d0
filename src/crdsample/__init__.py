"""Turn Kubernetes CRD schemas into sample YAML documents and property trees."""

__version__ = "0.1.0"

"""k8sconv — Kubernetes to Calico resource conversion."""

__version__ = "0.1.0"

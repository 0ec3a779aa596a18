"""Kubernetes resource models and manifest loading."""

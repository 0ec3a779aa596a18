"""Calico v2 resource models and serialization."""

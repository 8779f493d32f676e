"""Kubernetes operator reconciling Addon resources into OLM objects."""

"""Data models for decoded FCS samples."""

from fcsdecode.models.sample import FlowSample

__all__ = ["FlowSample"]

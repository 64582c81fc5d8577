"""Reconciler - Maps Jira ticket fields to pull request labels."""

from prlabeler.reconciler.models import ReconcileSummary, TagDecision
from prlabeler.reconciler.reconciler import Reconciler

__all__ = [
    "ReconcileSummary",
    "Reconciler",
    "TagDecision",
]

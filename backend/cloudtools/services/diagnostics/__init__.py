from __future__ import annotations

"""
Diagnostics and error classification utilities.

This package currently provides:
- error_classifier: turn the unstructured output of the Azure tools into
  human-actionable diagnoses that can be surfaced in the UI.

The goal is to keep the text patterns centralized and deterministic.
"""

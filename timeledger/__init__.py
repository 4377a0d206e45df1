"""Reconcile Hackatime heartbeat spans against devlog and release checkpoints."""

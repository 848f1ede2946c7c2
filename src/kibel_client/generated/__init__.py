"""Modules rendered by ``kibel-tools`` from the persisted contract snapshots."""

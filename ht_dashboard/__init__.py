"""Hattrick dashboard: CHPP sync, player change history and lineup scoring."""

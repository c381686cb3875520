"""Shootplan: templated checklists for wedding photography projects."""

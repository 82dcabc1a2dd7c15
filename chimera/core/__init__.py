"""Core types shared across Chimera: models, errors and collaborator interfaces."""

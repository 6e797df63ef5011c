"""Application layer: services that orchestrate the workbench core."""

"""Domain packages: orders (persistence collaborator) and calendar (scheduling core)"""

from sweep.infrastructure.tasks.di import TasksProvider

__all__ = ["TasksProvider"]

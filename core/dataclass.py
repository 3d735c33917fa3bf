from abc import ABC, abstractmethod

"""
This file defines the core data structures used to represent DSL programs.

The base class `DSLProgram` is an abstract representation of a complete DSL program.
Each concrete DSL (e.g. the DBC CAN database format) defines its own subclass of
`DSLProgram`, containing all domain-specific sections and entities.

`DSLProgram` carries no fields of its own, so concrete programs are free to be
frozen dataclasses. All DSL programs must implement a `validate` method to
ensure internal consistency.
"""
class DSLProgram(ABC):
    @abstractmethod
    def validate(self) -> None:
        """Validate the integrity of the program"""
        pass

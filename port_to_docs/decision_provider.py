"""Operator decisions for param names that could not be matched automatically."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

ACTION_SELECT = "select"
ACTION_SKIP = "skip"
ACTION_ABORT = "abort"


@dataclass(frozen=True)
class Decision:
    """The outcome of a prompt: pick a candidate by index, skip, or abort."""

    action: str
    index: int = -1

    @classmethod
    def select(cls, index: int) -> "Decision":
        """Pick the candidate at ``index``."""
        return cls(ACTION_SELECT, index)

    @classmethod
    def skip(cls) -> "Decision":
        """Leave the name unmatched."""
        return cls(ACTION_SKIP)

    @classmethod
    def abort(cls) -> "Decision":
        """Stop the whole port."""
        return cls(ACTION_ABORT)


class DecisionProvider(Protocol):
    """Anything that can resolve an unmatched param or typeparam name."""

    def choose(
        self,
        element_name: str,
        name: str,
        doc_id: str,
        file_path: str,
        candidates: list[str],
    ) -> Decision:
        """Decide which candidate name matches ``name``."""
        ...


class ConsoleDecisionProvider:
    """Asks the operator on the console, blocking until a valid answer."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        """Initialize with injectable input and output functions."""
        self.input_func = input_func
        self.output_func = output_func

    def _ask_number(self, prompt: str, upper: int) -> int:
        """Read a number in ``[0, upper]``, asking again until one is given."""
        while True:
            answer = self.input_func(prompt).strip()
            if not answer.isdigit():
                self.output_func("Not a number. Try again.")
                continue
            number = int(answer)
            if number > upper:
                self.output_func("Invalid selection. Try again.")
                continue
            return number

    def choose(
        self,
        element_name: str,
        name: str,
        doc_id: str,
        file_path: str,
        candidates: list[str],
    ) -> Decision:
        """Run the three-choice prompt: exit, select from the list, or skip."""
        logger.error(
            "Problem in %s '%s' in member '%s' in file '%s'",
            element_name,
            name,
            doc_id,
            file_path,
        )
        self.output_func(
            f"The {element_name} probably exists in code, but the exact name was "
            "not found in Docs. What would you like to do?"
        )
        self.output_func("    0 - Exit program.")
        self.output_func(
            f"    1 - Select the correct IntelliSense xml {element_name} "
            "from the existing ones."
        )
        self.output_func(f"    2 - Ignore this {element_name} and continue.")
        option = self._ask_number("Your answer [0,1,2]: ", 2)
        if option == 0:
            return Decision.abort()
        if option == 2:
            return Decision.skip()

        self.output_func(
            f"IntelliSense xml {element_name}s found in member '{doc_id}':"
        )
        self.output_func("    0 - Exit program.")
        self.output_func(f"    1 - Ignore this {element_name} and continue.")
        for counter, candidate in enumerate(candidates, start=2):
            self.output_func(f"    {counter} - {candidate}")
        selection = self._ask_number(
            f"Your answer to match {element_name} '{name}'? "
            f"[0..{len(candidates) + 1}]: ",
            len(candidates) + 1,
        )
        if selection == 0:
            return Decision.abort()
        if selection == 1:
            return Decision.skip()
        self.output_func(f"Selected: {candidates[selection - 2]}")
        return Decision.select(selection - 2)

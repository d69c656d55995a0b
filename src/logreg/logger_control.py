"""
Module: logger_control.py
Location: src/logreg/
Version: 0.1.0

Runtime verbosity commands, e.g. from an operator console or a control
socket:

    WORKER:+DEBUG|RAW          enable DEBUG and RAW for WORKER
    WORKER:-ERROR              disable ERROR for WORKER
    SOCKET:=ERROR              replace SOCKET's set with ERROR
    *:+CONTROL                 every context
    WORKER:+DEBUG,-ERROR       several changes to one context
    WORKER:+DEBUG;SOCKET:-ALL  several contexts

Commands are applied through LoggerManager, so the change reaches every
existing logger of the context immediately.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from logreg.log_context import LogContext
from logreg.log_level import LogLevel
from logreg.logger_exceptions import LoggerConfigError


class LevelAction(Enum):
    ENABLE = "+"
    DISABLE = "-"
    SET = "="


@dataclass(frozen=True)
class LevelCommand:
    context: LogContext
    action: LevelAction
    levels: LogLevel


def parse_level_command(text: str) -> List[LevelCommand]:
    commands: List[LevelCommand] = []

    for clause in text.split(";"):
        clause = clause.strip()
        if not clause:
            continue
        if ":" not in clause:
            raise LoggerConfigError(f"Missing ':' in level command '{clause}'")

        target, changes = clause.split(":", 1)
        contexts = _parse_targets(target)

        for change in changes.split(","):
            change = change.strip()
            if len(change) < 2:
                raise LoggerConfigError(f"Empty level change in '{clause}'")
            try:
                action = LevelAction(change[0])
            except ValueError:
                raise LoggerConfigError(
                    f"Level change '{change}' must start with +, - or ="
                ) from None
            try:
                levels = LogLevel.parse(change[1:])
            except ValueError as e:
                raise LoggerConfigError(str(e)) from e

            commands.extend(LevelCommand(c, action, levels) for c in contexts)

    if not commands:
        raise LoggerConfigError("Empty level command")
    return commands


def apply_level_commands(manager, text: str) -> Dict[LogContext, LogLevel]:
    """
    Parse and apply text against manager.

    Everything is parsed before anything is applied, so a malformed
    command changes nothing. Returns the resulting level per touched context.
    """
    commands = parse_level_command(text)
    result: Dict[LogContext, LogLevel] = {}

    for cmd in commands:
        if cmd.action is LevelAction.ENABLE:
            result[cmd.context] = manager.enable_logger_level(cmd.context, cmd.levels)
        elif cmd.action is LevelAction.DISABLE:
            result[cmd.context] = manager.disable_logger_level(cmd.context, cmd.levels)
        else:
            # Enable before disable: bits in both old and new sets stay on
            manager.enable_logger_level(cmd.context, cmd.levels)
            result[cmd.context] = manager.disable_logger_level(
                cmd.context, LogLevel(int(LogLevel.ALL) & ~int(cmd.levels))
            )

    return result


def _parse_targets(target: str) -> List[LogContext]:
    target = target.strip()
    if target == "*":
        return list(LogContext)
    try:
        return [LogContext.parse(target)]
    except ValueError as e:
        raise LoggerConfigError(str(e)) from e

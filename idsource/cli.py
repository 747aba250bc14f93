from __future__ import annotations

import logging
import time
from typing import Callable

import typer

from .common.run_id import generate_run_id
from .common.time import getDurationMs
from .config import Settings, loadSettings
from .errors import AppError
from .input import resolveIds, shouldReadStream
from .loggingSetup import closeCommandLogger, createCommandLogger, logEvent
from .output import parseOutputFormat, renderCount, renderIds

app = typer.Typer(no_args_is_help=True, add_completion=False)

IDS_HELP = "Identifiers. Omit them or pass '-' to read one identifier per line from stdin"

def printRunHeader(runId: str, command: str, settings: Settings, sources: list[str]) -> None:
    """
    Назначение:
        Печатает сводку параметров запуска.

    Входные данные:
        runId: str
        command: str
        settings: Settings
        sources: list[str]
    """
    typer.echo(
        f"run_id={runId} command={command} "
        f"log_dir={settings.log_dir} log_level={settings.log_level} log_file={settings.log_file} "
        f"output={settings.output_format} sources={sources}"
    )

def runCommand(
    ctx: typer.Context,
    commandName: str,
    runner: Callable[[logging.Logger], int | None],
) -> None:
    """
    Назначение:
        Унифицированная обвязка выполнения команд:
        - создаёт логгер (+ файл лога, если включён)
        - пишет события старта/завершения с длительностью
        - переводит код возврата runner в typer.Exit

    Входные данные:
        ctx: typer.Context
        commandName: str
        runner: Callable[[logging.Logger], int | None]
            Тело команды; None или 0 означает успех.
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]

    startMonotonic = time.monotonic()

    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
        toFile=settings.log_file,
    )

    exitCode: int | None = None

    try:
        logEvent(logger, logging.INFO, runId, "core", "Command started")
        if logFilePath:
            logEvent(logger, logging.DEBUG, runId, "core", f"Log file: {logFilePath}")
        exitCode = runner(logger)
    finally:
        durationMs = getDurationMs(startMonotonic, time.monotonic())
        logEvent(
            logger,
            logging.INFO,
            runId,
            "core",
            f"Command finished exit_code={exitCode or 0} duration_ms={durationMs}",
        )
        closeCommandLogger(logger)

    if exitCode:
        raise typer.Exit(code=exitCode)

def collectIds(ctx: typer.Context, logger: logging.Logger, explicit: list[str] | None) -> list[str]:
    """
    Назначение:
        Разрешает идентификаторы (аргументы или stdin) и логирует источник и количество.
    """
    runId = ctx.obj["runId"]
    explicit = explicit or []
    source = "stdin" if shouldReadStream(explicit) else "args"
    ids = resolveIds(explicit)
    logEvent(logger, logging.INFO, runId, "input", f"Ids resolved: source={source} count={len(ids)}")
    return ids

@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to YAML config"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier used in logs"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for command logs"),
    logLevel: str | None = typer.Option(None, "--log-level", help="ERROR|WARN|INFO|DEBUG"),
    logFile: bool | None = typer.Option(
        None,
        "--log-file/--no-log-file",
        help="Write a log file per command run",
        show_default=False,
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format: text|json"),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = generate_run_id()

    cliOverrides = {
        "log_dir": logDir,
        "log_level": logLevel,
        "log_file": logFile,
        "output_format": output,
    }
    try:
        loaded = loadSettings(config_path=config, cli_overrides=cliOverrides)
    except AppError as exc:
        typer.echo(f"ERROR: {exc.message}", err=True)
        raise typer.Exit(code=2)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
        "configPath": config,
    }

@app.command("ids")
def idsCommand(
    ctx: typer.Context,
    ids: list[str] | None = typer.Argument(None, help=IDS_HELP, show_default=False),
):
    """Print resolved identifiers."""
    settings: Settings = ctx.obj["settings"]

    def execute(logger: logging.Logger) -> int:
        resolved = collectIds(ctx, logger, ids)
        rendered = renderIds(resolved, parseOutputFormat(settings.output_format))
        if rendered:
            typer.echo(rendered)
        return 0

    runCommand(ctx, "ids", execute)

@app.command("count")
def countCommand(
    ctx: typer.Context,
    ids: list[str] | None = typer.Argument(None, help=IDS_HELP, show_default=False),
):
    """Print the number of resolved identifiers."""
    settings: Settings = ctx.obj["settings"]

    def execute(logger: logging.Logger) -> int:
        resolved = collectIds(ctx, logger, ids)
        typer.echo(renderCount(len(resolved), parseOutputFormat(settings.output_format)))
        return 0

    runCommand(ctx, "count", execute)

@app.command("show-config")
def showConfig(ctx: typer.Context):
    """Print effective settings and where they came from."""
    settings: Settings = ctx.obj["settings"]

    def execute(logger: logging.Logger) -> int:
        printRunHeader(ctx.obj["runId"], "show-config", settings, ctx.obj["sources"])
        return 0

    runCommand(ctx, "show-config", execute)

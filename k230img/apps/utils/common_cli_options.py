#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
from typing import Any, Callable, Optional, TypeVar, Union

import click

from k230img import __version__ as k230img_version
from k230img.exceptions import K230KeyError
from k230img.image.schemes import EncryptionType

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)


def k230img_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(k230img_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def k230img_input_option(
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling the input file.

    Provides: `input_file: str` a full path to an existing file.

    :param help: Customized help message, defaults to None
    :return: Click decorator.
    """

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        func = click.option(
            "-i",
            "--input",
            "input_file",
            type=click.Path(resolve_path=True, exists=True, dir_okay=False),
            required=True,
            help=help or "Path to the input file.",
        )(func)
        return func

    return decorator


def k230img_config_option(
    required: bool = True,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling config files.

    Provides: `config: str` a full path to config file.

    :param required: Config file is required
    :param help: Customized help message, defaults to None
    :return: Click decorator.
    """

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        func = click.option(
            "-c",
            "--config",
            type=click.Path(resolve_path=True, exists=True, dir_okay=False),
            required=required,
            help=help or "Path to the YAML/JSON key material configuration file.",
        )(func)
        return func

    return decorator


def k230img_output_option(
    required: bool = True,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling on output file.

    Provides: `output: str` a full path to file, None when not given.

    :param required: Output option is required, defaults to True
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        func = click.option(
            "-o",
            "--output",
            type=click.Path(resolve_path=True, dir_okay=False),
            required=required,
            help=help or "Path to a file, where to store the output.",
        )(func)
        return func

    return decorator


def k230img_encryption_option(
    default: Optional[str] = EncryptionType.NONE.label,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling the payload protection scheme.

    Provides: `encryption: EncryptionType`. Scheme labels and their aliases
    are accepted case-insensitively.

    :param default: Default scheme name, None makes the option required
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """

    def callback(
        ctx: click.Context,  # pylint: disable=unused-argument  # click's callback signature
        param: click.Parameter,
        value: Optional[str],
    ) -> Optional[EncryptionType]:
        if value is None:
            return None
        try:
            return EncryptionType.from_name(value)
        except K230KeyError as exc:
            raise click.BadParameter(str(exc), param=param) from exc

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        choices = EncryptionType.labels() + list(EncryptionType.aliases())
        func = click.option(
            "-e",
            "--encryption",
            type=click.Choice(choices, case_sensitive=False),
            default=default,
            required=default is None,
            show_default=default is not None,
            callback=callback,
            help=help
            or (
                "Payload protection scheme. "
                + ", ".join(f"{alias} = {label}" for alias, label in EncryptionType.aliases().items())
                + "."
            ),
        )(func)
        return func

    return decorator

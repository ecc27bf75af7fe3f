#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import json
import signal
import sys
import tomllib
from types import SimpleNamespace
from typing import Optional

import click
from rich.panel import Panel
from rich.text import Text

from review_proof.client import HttpClient
from review_proof.display import (
    console,
    employee_display,
    employees_table,
    error_panel,
    print_rule,
    setup_logging,
    staged_file_panel,
    status_banner,
    warn_panel,
)
from review_proof.encoder import SOFT_SIZE_LIMIT, exceeds_soft_limit
from review_proof.form import ReviewForm
from review_proof.prompts import SessionFactory
from review_proof.utils import Config


# ========== Application Orchestrator ==========
class App:
    def __init__(self, cfg: Config, client: Optional[HttpClient] = None):
        self.cfg = cfg
        self.http = client or HttpClient(cfg)
        self.form = ReviewForm(self.http, on_status=status_banner)
        self.employee_session = SessionFactory.build_employee_session(cfg.employees)
        self.image_session = SessionFactory.build_image_session()
        self.counter = 1

    def run(self):
        self._print_banner()

        with self.form:
            while True:
                try:
                    self._fill_employee()
                    self._fill_image()
                    self._handle_submit()
                    self.counter += 1
                except KeyboardInterrupt:
                    console.print("[warn] Input cancelled.（Ctrl+C）[/warn]")
                    continue
                except EOFError:
                    console.print("\n[info]Exited.（Ctrl+D）[/info]")
                    break
                except Exception as e:
                    console.print(Panel.fit(Text(repr(e), no_wrap=False), title="Unexpected error !", border_style="red"))
                    self.counter += 1
                    continue

    # ========== Internal helpers ==========
    def _fill_employee(self):
        raw = self.employee_session.prompt(
            SessionFactory.make_prompt_fragments(self.counter, "👥 Employee"),
            default=self.form.employee_name,
        )
        opt = self.cfg.find_employee(raw)
        self.form.select_employee(opt.value if opt else raw.strip())

    def _fill_image(self):
        current = str(self.form.staged.path) if self.form.staged else ""
        raw = self.image_session.prompt(
            SessionFactory.make_prompt_fragments(self.counter, "📸 Evidence image"),
            default=current,
        ).strip()
        if not raw:
            self.form.remove_file()
            return
        stage_and_show(self.form, raw)

    def _handle_submit(self):
        console.print(f"[info]Send review proof to ->[/info] {self.cfg.url}")
        if self.form.submit() and self.cfg.debug:
            console.print(Panel.fit(
                    Text(json.dumps(self.form.last_response, ensure_ascii=False, indent=2), no_wrap=False),
                    title="Response", border_style="green"
            ))

    def _print_banner(self):
        print_rule("ส่งหลักฐาน Google Review")
        console.print(Panel.fit(
                Text(
                        "Descriptions：\n"
                        " - Employee：Tab to list choices\n"
                        " - Evidence：path to a PNG/JPG image (up to 10MB)\n"
                        " - Cancel：Ctrl+C\n"
                        " - Exit：Ctrl+D\n\n"
                        "After a failed submission your answers are kept, press Enter to retry.",
                        no_wrap=False
                ),
                title="Help", border_style="cyan"
        ))
        console.print(f"[info]Endpoint：[/info]{self.cfg.url}")
        if not self.cfg.verify_tls:
            console.print("[warn] Disable tls verification !（--insecure）[/warn]")


def stage_and_show(form: ReviewForm, path: str):
    form.stage_file(path)
    staged_file_panel(form.staged, form.preview.path if form.preview else None)
    if exceeds_soft_limit(form.staged.path):
        warn_panel("Large file", f"{form.staged.name} is larger than {SOFT_SIZE_LIMIT // (1024 * 1024)}MB, upload may be slow.")


def _require_url(cfg: Config):
    if not cfg.url:
        raise click.UsageError("No endpoint configured: pass --url, set REVIEW_PROOF_URL or add url to the config file.")


# ========== CLI with Click ==========

@click.group()
@click.option("--url", help="Apps Script endpoint, can also be set in ~/.review-proof.toml")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path.")
@click.option("--timeout", type=int, default=None, help="Max timeout in seconds.  [default: 30]")
@click.option("--insecure", is_flag=True, help="Whether disable tls.")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.pass_context
def cli(ctx, url, config_path, timeout, insecure, debug):
    """
    review-proof: Send Google review evidence for an employee.
    """
    signal.signal(signal.SIGINT, signal.default_int_handler)
    args = SimpleNamespace(url=url, config=config_path, timeout=timeout, insecure=insecure, debug=debug)
    try:
        cfg = Config.init_from_args(args)
    except (tomllib.TOMLDecodeError, KeyError, TypeError, ValueError) as e:
        raise click.UsageError(f"Invalid config file: {e!r}")
    setup_logging(cfg.debug)
    ctx.obj = {"cfg": cfg}


@cli.command("run")
@click.pass_context
def run_cmd(ctx):
    """Start the interactive form."""
    cfg = ctx.obj["cfg"]
    _require_url(cfg)
    App(cfg).run()


@cli.command("submit")
@click.option("--employee", "-e", default="", help="Employee value or label.")
@click.option("--image", "-i", type=click.Path(dir_okay=False), help="Evidence image.")
@click.pass_context
def submit_cmd(ctx, employee, image):
    """Submit one review proof and exit."""
    cfg = ctx.obj["cfg"]
    _require_url(cfg)

    opt = cfg.find_employee(employee) if employee else None
    if employee and cfg.employees and opt is None:
        raise click.BadParameter(f"unknown employee {employee!r}", param_hint="--employee")

    with ReviewForm(HttpClient(cfg), on_status=status_banner) as form:
        form.select_employee(opt.value if opt else employee.strip())
        if image:
            stage_and_show(form, image)
        console.print(f"[info]Send review proof for[/info] {employee_display(opt, employee) or '-'}")
        ok = form.submit()
    sys.exit(0 if ok else 1)


@cli.command("employees")
@click.pass_context
def employees_cmd(ctx):
    """List configured employees."""
    cfg = ctx.obj["cfg"]
    if not cfg.employees:
        error_panel("Employees", "No employees configured, add [[employees]] entries to the config file.")
        sys.exit(1)
    console.print(employees_table(cfg.employees))


def main():
    cli(prog_name="review-proof")


if __name__ == "__main__":
    main()

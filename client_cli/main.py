from __future__ import annotations

from typing import Optional
from pathlib import Path
import os

import typer
from rich.console import Console
import httpx

from weather_chat.orchestrator import FRAME_PREFIX, decode_frame


app = typer.Typer()
console = Console()
err_console = Console(stderr=True)


def stream_reply(url: str, messages: list[dict], timeout: float = 60) -> str:
    """POST the conversation and print the reply as frames arrive."""
    reply = ""
    with httpx.stream(
        "POST",
        url,
        json={"messages": messages},
        headers={"Content-Type": "application/json"},
        timeout=timeout,
    ) as resp:
        resp.raise_for_status()
        for line in resp.iter_lines():
            if not line or not line.startswith(FRAME_PREFIX):
                # Only text frames are rendered
                continue
            text = decode_frame(line)
            console.print(text, end="", markup=False, highlight=False)
            reply += text
    console.print()
    return reply


def _append_markdown(output_file: Path, question: str, answer: str) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("a", encoding="utf-8") as f:
        if f.tell() > 0:
            f.write("\n\n---\n\n")
        f.write(f"**You:** {question}\n\n{answer}\n")


@app.command()
def cli(
    prompt_str: Optional[str] = typer.Option(
        None, "--prompt", help="Ask a single question and exit."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Append each exchange to a Markdown file."
    ),
) -> None:
    api_url = os.getenv("CHAT_API_URL", "http://localhost:3000")
    url = f"{api_url.rstrip('/')}/api/chat"
    # The server keeps no history; every turn resends the whole conversation.
    history: list[dict] = []

    def ask(question: str) -> bool:
        history.append({"role": "user", "content": question})
        try:
            answer = stream_reply(url, history)
        except httpx.HTTPError as e:
            err_console.print(f"Request failed: {e}", style="bold red")
            history.pop()
            return False
        history.append({"role": "assistant", "content": answer})
        if output_file:
            try:
                _append_markdown(output_file, question, answer)
            except OSError as e:
                err_console.print(f"Failed to write file: {e}", style="bold red")
        return True

    if prompt_str:
        if not ask(prompt_str):
            raise typer.Exit(code=1)
        return

    console.print("Ask about the weather or what to pack (type 'exit' to quit).", style="dim")
    while True:
        try:
            user_in = typer.prompt("You")
        except (EOFError, KeyboardInterrupt):
            break
        lower = user_in.strip().lower()
        if not lower:
            continue
        if lower in {"exit", "quit", "q"}:
            break
        ask(user_in.strip())


if __name__ == "__main__":
    app()

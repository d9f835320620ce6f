"""Display functions for studio commands - pure functions for Rich output."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...content import ContentBundle, ParagraphPrompt
from .params import MultiStoryParams, SingleStoryParams
from .service import StudioRunOutput


def show_single_config(console: Console, params: SingleStoryParams) -> None:
    """Display single-story configuration panel."""
    source = f"URL: [cyan]{params.url}[/cyan]" if params.url else f"Headline: [cyan]{params.headline}[/cyan]"
    language = f"\nLanguage: [yellow]{params.language}[/yellow]" if params.language else ""
    console.print(Panel(
        f"{source}{language}\n"
        f"Image: [yellow]{params.image or 'none'}[/yellow]\n"
        f"Paragraph prompts: [yellow]{'yes' if params.paragraphs else 'no'}[/yellow]\n"
        f"Output: [yellow]{params.output_dir or 'console only'}[/yellow]",
        title="News Segment Generation",
    ))


def show_multi_config(console: Console, params: MultiStoryParams) -> None:
    """Display roundup configuration panel."""
    lines = []
    for index, (headline, image) in enumerate(zip(params.headlines, params.images), 1):
        image_str = f" [dim](image: {image})[/dim]" if image else ""
        lines.append(f"{index}. [cyan]{headline}[/cyan]{image_str}")
    console.print(Panel(
        "\n".join(lines) + "\n"
        f"Paragraph prompts: [yellow]{'yes' if params.paragraphs else 'no'}[/yellow]\n"
        f"Output: [yellow]{params.output_dir or 'console only'}[/yellow]",
        title=f"News Roundup Generation ({len(params.headlines)} stories)",
    ))


def show_bundle(console: Console, bundle: ContentBundle) -> None:
    """Display the text content of a bundle."""
    console.print(Panel(bundle.script, title=f"Script [dim]({bundle.topic.value})[/dim]", border_style="cyan"))
    if bundle.translated_script:
        console.print(Panel(
            bundle.translated_script,
            title=f"Script ({bundle.translated_language or 'translated'})",
            border_style="cyan",
        ))

    youtube = bundle.social_media_content.youtube
    social = Table(title="Social Media", show_header=True, header_style="bold")
    social.add_column("Platform", style="cyan")
    social.add_column("Content")
    social.add_row("YouTube title", youtube.title)
    social.add_row("YouTube description", youtube.description)
    social.add_row("Keywords", ", ".join(youtube.keywords))
    social.add_row("Hashtags", " ".join(youtube.hashtags))
    social.add_row("Facebook", bundle.social_media_content.facebook.post)
    social.add_row("Instagram", bundle.social_media_content.instagram.post)
    console.print(social)

    prompts = Table(title="Video Prompts", show_header=True, header_style="bold")
    prompts.add_column("Kind", style="cyan")
    prompts.add_column("Prompt")
    if bundle.thumbnail_prompt:
        prompts.add_row("Thumbnail", bundle.thumbnail_prompt)
    if bundle.intro_video_prompt:
        prompts.add_row("Intro video", bundle.intro_video_prompt)
    for index, prompt in enumerate(bundle.story_video_prompts, 1):
        prompts.add_row(f"Story video {index}", prompt)
    for index, prompt in enumerate(bundle.video_image_prompts, 1):
        prompts.add_row(f"B-roll {index}", prompt)
    console.print(prompts)


def show_paragraph_prompts(console: Console, prompts: list[ParagraphPrompt] | tuple[ParagraphPrompt, ...]) -> None:
    """Display paragraph/prompt pairs."""
    table = Table(title="Paragraph Video Prompts", show_header=True, header_style="bold", show_lines=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Paragraph")
    table.add_column("Prompt", style="cyan")
    for index, item in enumerate(prompts, 1):
        table.add_row(str(index), item.paragraph, item.prompt)
    console.print(table)


def show_studio_result(console: Console, output: StudioRunOutput) -> None:
    """Display a finished run: text, images, warnings and saved files."""
    result = output.result
    show_bundle(console, result.bundle)

    if result.paragraph_prompts:
        show_paragraph_prompts(console, result.paragraph_prompts)

    roles = result.images.roles()
    images_line = ", ".join(roles) if roles else "none"
    final_prompt = f"\n[bold]Image prompt:[/] {result.images.final_prompt}" if result.images.final_prompt else ""
    saved = f"\n[bold]Output:[/] {output.output_dir} ({len(output.files)} files)" if output.output_dir else ""
    border = "yellow" if result.warnings else "green"
    console.print(Panel(
        f"[bold green]Content generated![/bold green]\n\n"
        f"[bold]Images:[/] {images_line}"
        f"{final_prompt}{saved}",
        title="Complete",
        border_style=border,
    ))

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


def show_thumbnail_result(console: Console, path: Optional[Path]) -> None:
    location = str(path) if path else "not saved (use --output)"
    console.print(Panel(f"[bold green]Thumbnail regenerated![/bold green]\n\n[bold]Output:[/] {location}", border_style="green"))


def show_broll_result(console: Console, requested: int, generated: int, files: list[Path]) -> None:
    style = "green" if generated == requested else "yellow"
    saved = f"\n[bold]Saved:[/] {len(files)} file(s)" if files else ""
    console.print(Panel(
        f"[{style}]Generated {generated}/{requested} B-roll image(s)[/{style}]{saved}",
        border_style=style,
    ))


def show_studio_error(console: Console, error: str, details: Optional[dict] = None) -> None:
    """Display a failed run, including any text content that survived."""
    details = dict(details or {})
    bundle = details.pop("bundle", None)
    if bundle is not None:
        show_bundle(console, bundle)
    console.print(f"\n[red]Error: {error}[/red]")
    for key, value in details.items():
        console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")

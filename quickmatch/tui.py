from __future__ import annotations

import logging
from collections.abc import Iterable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key, Paste
from textual.widgets import OptionList, Static

from quickmatch.models import MatchResult
from quickmatch.ranking import results_by_score
from quickmatch.rendering import format_score, to_rich_text
from quickmatch.search import score_with_parts

logger = logging.getLogger(__name__)


class QuickOpenPicker(App[str]):
    CSS = """
    #sidebar {
        border: round $accent;
        height: 1fr;
    }
    #candidate-list {
        height: 1fr;
        border: none;
    }
    #status {
        height: auto;
        color: $text-muted;
    }
    """
    ENABLE_COMMAND_PALETTE = False
    DEFAULT_THRESHOLD = 1.0
    BINDINGS = [
        Binding("escape", "escape", "Clear / Quit"),
        Binding("ctrl+c", "quit", show=False),
    ]

    def __init__(
        self,
        candidates: Iterable[str],
        *,
        query: str = "",
        threshold: float = DEFAULT_THRESHOLD,
        show_scores: bool = False,
    ) -> None:
        super().__init__()
        self._all_candidates: list[str] = list(candidates)
        self._search_query = query
        self._threshold = threshold
        self._show_scores = show_scores
        self._visible_results: list[MatchResult[str]] = []

    def compose(self) -> ComposeResult:
        with Vertical(id="sidebar"):
            yield OptionList(id="candidate-list")
            yield Static("", id="status")

    def on_mount(self) -> None:
        self.query_one("#candidate-list", OptionList).focus()
        self._filter_candidates()

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def visible_texts(self) -> list[str]:
        return [result.text for result in self._visible_results]

    def _rank(self) -> list[MatchResult[str]]:
        if not self._search_query:
            results = []
            for candidate in self._all_candidates:
                value, parts = score_with_parts("", candidate)
                results.append(
                    MatchResult(
                        item=candidate, text=candidate, score=value, parts=tuple(parts)
                    )
                )
            return results
        return results_by_score(
            self._search_query, self._all_candidates, threshold=self._threshold
        )

    def _format_option_label(self, result: MatchResult[str]) -> Text:
        label = to_rich_text(result.parts)
        if self._show_scores:
            return Text.assemble((f"{format_score(result.score)} ", "dim"), label)
        return label

    def _render_candidate_options(self) -> None:
        candidate_list = self.query_one("#candidate-list", OptionList)
        candidate_list.clear_options()
        if self._visible_results:
            candidate_list.add_options(
                [self._format_option_label(result) for result in self._visible_results]
            )
            candidate_list.action_first()
            return
        candidate_list.add_option("No candidates found")

    def _filter_candidates(self) -> None:
        self._visible_results = self._rank()
        logger.debug(
            "Query %r shows %d of %d candidates",
            self._search_query,
            len(self._visible_results),
            len(self._all_candidates),
        )
        self._render_candidate_options()
        self._update_status()
        self._update_filter_indicator()

    def _status_text(self) -> str:
        if not self._visible_results and self._search_query:
            return f"No candidates match '{self._search_query}'."
        return f"{len(self._visible_results)} of {len(self._all_candidates)} candidates"

    def _update_status(self) -> None:
        self.query_one("#status", Static).update(self._status_text())

    def _filter_indicator_text(self) -> Text:
        indicator = Text()
        if self._search_query:
            indicator.append(">", style="bold red")
            indicator.append(f" {self._search_query}_", style="bold white")
        else:
            indicator.append("type to filter", style="dim")
        return indicator

    def _update_filter_indicator(self) -> None:
        sidebar = self.query_one("#sidebar", Vertical)
        sidebar.border_title = self._filter_indicator_text()

    def _set_query(self, query: str) -> None:
        self._search_query = query
        self._filter_candidates()

    def action_escape(self) -> None:
        if self._search_query:
            self._set_query("")
            return
        self.exit()

    def on_key(self, event: Key) -> None:
        if event.key == "backspace":
            self._set_query(self._search_query[:-1])
            event.stop()
            return

        if event.character and event.character.isprintable():
            self._set_query(self._search_query + event.character)
            event.stop()
            return

    def on_paste(self, event: Paste) -> None:
        sanitized = event.text.replace("\r", "").replace("\n", "")
        if not sanitized:
            return
        self._set_query(self._search_query + sanitized)
        event.stop()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if not self._visible_results:
            return
        self.exit(self._visible_results[event.option_index].text)

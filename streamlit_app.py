"""Streamlit frontend for the ICP Prompt Tool.

Thin UI layer: questions, prompt templates and results go through the
cached stores; imports and runs go through the backend services.
"""

from __future__ import annotations

import io
import json
import logging
import os
import uuid
from typing import Any

import pandas as pd
import streamlit as st

from app.domain.prompt_run import RunOutcome, RunProgress
from app.services.json_import_service import ImportSummary, JsonImportError
from app.stores import (
    LastTemplateError,
    PromptResultStore,
    PromptTemplateStore,
    QuestionStore,
    StoreError,
)
from llm_completion.catalog import AVAILABLE_MODELS, DEFAULT_MODEL, find_model

st.set_page_config(page_title="ICP Prompt Tool", layout="wide")

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

_PROMPT_PREVIEW_CHARS = 1000


@st.cache_resource(show_spinner=False)
def _load_backend_handles():
    """Load backend services lazily to keep startup lightweight."""
    from app.services.json_import_service import get_json_import_service  # noqa: PLC0415
    from app.services.prompt_run_orchestrator import build_completion_adapter  # noqa: PLC0415
    from db.session import SessionLocal  # noqa: PLC0415

    return {
        "session_factory": SessionLocal,
        "import_service": get_json_import_service(),
        "adapter": build_completion_adapter(),
    }


def _init_state() -> None:
    handles = _load_backend_handles()
    session_factory = handles["session_factory"]

    defaults: dict[str, Any] = {
        "selected_question_ids": [],
        "selected_model": os.getenv("LLM_MODEL", DEFAULT_MODEL),
        "import_summary": None,
        "import_error": None,
        "run_outcome": None,
        "running": False,
        "results_domain": "",
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

    if "question_store" not in st.session_state:
        store = QuestionStore(session_factory=session_factory)
        _guarded(store.refresh)
        st.session_state.question_store = store
    if "template_store" not in st.session_state:
        store = PromptTemplateStore(session_factory=session_factory)
        _guarded(store.ensure_default)
        st.session_state.template_store = store
    if "result_store" not in st.session_state:
        store = PromptResultStore(session_factory=session_factory)
        _guarded(store.refresh)
        st.session_state.result_store = store


def _guarded(operation, *args: Any, **kwargs: Any) -> Any:
    """Run a store operation and surface StoreError inline."""
    try:
        return operation(*args, **kwargs)
    except StoreError as exc:
        st.error(str(exc))
        return None


def _selected_questions() -> list[str]:
    store: QuestionStore = st.session_state.question_store
    return store.contents_for(st.session_state.selected_question_ids)


def _prune_selection() -> None:
    store: QuestionStore = st.session_state.question_store
    known = {question.id for question in store.list()}
    st.session_state.selected_question_ids = [
        question_id for question_id in st.session_state.selected_question_ids if question_id in known
    ]


def _toggle_question(question_id: uuid.UUID) -> None:
    selected: list[uuid.UUID] = st.session_state.selected_question_ids
    if st.session_state.get(f"select_{question_id}"):
        if question_id not in selected:
            selected.append(question_id)
    else:
        st.session_state.selected_question_ids = [qid for qid in selected if qid != question_id]


def _select_all() -> None:
    store: QuestionStore = st.session_state.question_store
    st.session_state.selected_question_ids = [question.id for question in store.list()]
    for question in store.list():
        st.session_state[f"select_{question.id}"] = True


def _select_none() -> None:
    store: QuestionStore = st.session_state.question_store
    st.session_state.selected_question_ids = []
    for question in store.list():
        st.session_state[f"select_{question.id}"] = False


def _apply_import(loader, *args: Any, **kwargs: Any) -> None:
    try:
        summary: ImportSummary = loader(*args, **kwargs)
    except JsonImportError as exc:
        st.session_state.import_error = str(exc)
        return
    st.session_state.import_summary = None if summary.is_empty else summary
    st.session_state.import_error = summary.warnings[-1] if summary.warnings else None


def _on_paste_change() -> None:
    handles = _load_backend_handles()
    _apply_import(handles["import_service"].import_text, st.session_state.get("pasted_json", ""))


def _results_frame(results: list[Any]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "id": str(result.id),
                "domain_url": result.domain_url,
                "created_at": result.created_at,
                "model": (result.prompt_input or {}).get("model"),
                "response": result.response,
            }
            for result in results
        ],
        columns=["id", "domain_url", "created_at", "model", "response"],
    )


_init_state()

question_store: QuestionStore = st.session_state.question_store
template_store: PromptTemplateStore = st.session_state.template_store
result_store: PromptResultStore = st.session_state.result_store


# ── Sidebar: model + prompt template ───────────────────────────────────────
with st.sidebar:
    st.header("Settings")

    model_ids = [option.id for option in AVAILABLE_MODELS]
    current_model = find_model(st.session_state.selected_model)
    st.session_state.selected_model = st.selectbox(
        "Model",
        options=model_ids,
        index=model_ids.index(current_model.id),
        format_func=lambda model_id: f"{find_model(model_id).name} ({find_model(model_id).family})",
    )
    st.caption(find_model(st.session_state.selected_model).description)
    st.caption("Model used for AI analysis. Different models have different capabilities and costs.")

    templates = template_store.list()
    if templates:
        template_ids = [template.id for template in templates]
        selected_index = (
            template_ids.index(template_store.selected_id)
            if template_store.selected_id in template_ids
            else 0
        )
        chosen_id = st.selectbox(
            "System prompt template",
            options=template_ids,
            index=selected_index,
            format_func=lambda template_id: template_store.get(template_id).name,
        )
        template_store.select(chosen_id)


st.title("ICP Prompt Tool")
st.caption("Create questions, import website data, and generate AI-powered insights")

left, right = st.columns(2)

# ── Questions ──────────────────────────────────────────────────────────────
with left:
    st.subheader("Questions")
    with st.form("add_question", clear_on_submit=True):
        new_content = st.text_input("New question", placeholder="Enter a new question...")
        new_tag = st.text_input("Tag", placeholder="untagged")
        if st.form_submit_button("Add"):
            if new_content.strip():
                _guarded(question_store.create, new_content, new_tag)
            else:
                st.warning("Question content is required.")

    questions = question_store.list()
    if not questions:
        st.info("No questions yet. Add one above.")

    for question in questions:
        with st.expander(f"[{question.tag}] {question.content}"):
            edited_content = st.text_input("Question", value=question.content, key=f"edit_{question.id}")
            edited_tag = st.text_input("Tag", value=question.tag, key=f"edit_tag_{question.id}")
            save_col, delete_col = st.columns(2)
            if save_col.button("Save", key=f"save_{question.id}"):
                if edited_content.strip():
                    _guarded(question_store.update, question.id, content=edited_content, tag=edited_tag)
                    st.rerun()
                else:
                    st.warning("Question content is required.")
            if delete_col.button("Delete", key=f"delete_{question.id}"):
                try:
                    question_store.delete(question.id)
                except StoreError as exc:
                    st.error(str(exc))
                else:
                    _prune_selection()
                    st.rerun()

    _prune_selection()
    if questions:
        st.subheader("Select Questions")
        all_col, none_col = st.columns(2)
        all_col.button("Select All", on_click=_select_all)
        none_col.button("Clear", on_click=_select_none)
        for tag in question_store.tags():
            st.markdown(f"**{tag}**")
            for question in questions:
                if question.tag != tag:
                    continue
                st.session_state.setdefault(
                    f"select_{question.id}",
                    question.id in st.session_state.selected_question_ids,
                )
                st.checkbox(
                    question.content,
                    key=f"select_{question.id}",
                    on_change=_toggle_question,
                    args=(question.id,),
                )

# ── System prompt ──────────────────────────────────────────────────────────
with left:
    st.subheader("System Prompt")
    selected_template = template_store.selected()
    if selected_template is not None:
        with st.form(f"template_{selected_template.id}"):
            template_name = st.text_input("Name", value=selected_template.name)
            template_content = st.text_area("Instructions", value=selected_template.content, height=220)
            save_clicked = st.form_submit_button("Save")
        if save_clicked:
            if _guarded(
                template_store.update,
                selected_template.id,
                name=template_name,
                content=template_content,
            ) is not None:
                st.success("Template saved.")
        if len(selected_template.content) > _PROMPT_PREVIEW_CHARS:
            st.caption(f"{len(selected_template.content)} characters total")
        if st.button("Delete template", key="delete_template"):
            try:
                template_store.delete(selected_template.id)
            except LastTemplateError as exc:
                st.warning(str(exc))
            except StoreError as exc:
                st.error(str(exc))
            else:
                st.rerun()

    with st.form("new_template", clear_on_submit=True):
        st.markdown("New template")
        new_template_name = st.text_input("Template name")
        new_template_content = st.text_area("Template instructions", height=120)
        if st.form_submit_button("Create template"):
            created = _guarded(template_store.create, new_template_name, new_template_content)
            if created is not None:
                template_store.select(created.id)
                st.rerun()
    st.caption("This prompt is sent as the system instruction to the model.")

# ── JSON import ────────────────────────────────────────────────────────────
with right:
    st.subheader("Import JSON Data")
    uploaded_file = st.file_uploader("Upload JSON/TXT File", type=["json", "txt"])
    if uploaded_file is not None and st.session_state.get("last_upload") != uploaded_file.file_id:
        st.session_state.last_upload = uploaded_file.file_id
        _apply_import(
            _load_backend_handles()["import_service"].import_bytes,
            uploaded_file.getvalue(),
            filename=uploaded_file.name,
        )

    st.text_area(
        "Or paste JSON directly:",
        key="pasted_json",
        placeholder='[{"domainURL": "example.com", "company": "Example Inc", ...}]',
        height=220,
        on_change=_on_paste_change,
    )

    if st.session_state.import_error:
        st.error(st.session_state.import_error)

    summary: ImportSummary | None = st.session_state.import_summary
    if summary is not None:
        st.success(
            f"Loaded {summary.entry_count} entries with {len(summary.unique_domains)} unique domains"
        )
        for domain in summary.domain_preview:
            st.markdown(f"- {domain}")
        if summary.hidden_domain_count:
            st.markdown(f"...and {summary.hidden_domain_count} more")
        if summary.user_context is not None:
            with st.expander("User context"):
                st.json(summary.user_context)
        with st.expander("Normalized records"):
            st.json(summary.records)

# ── Run ────────────────────────────────────────────────────────────────────
with right:
    st.subheader("Run Prompts")
    selected_questions = _selected_questions()
    domain_count = len(summary.unique_domains) if summary is not None else 0
    st.markdown(f"Model: **{st.session_state.selected_model}**")
    st.markdown(f"Selected questions: **{len(selected_questions)}**")
    st.markdown(f"Domains to process: **{domain_count}**")

    can_run = bool(selected_questions) and domain_count > 0 and not st.session_state.running
    run_clicked = st.button(
        f"Run Prompts for {domain_count} Domains",
        type="primary",
        disabled=not can_run,
        use_container_width=True,
    )
    if summary is None:
        st.caption("Import JSON data first")

    if run_clicked and summary is not None:
        from app.services.prompt_run_orchestrator import PromptRunOrchestrator  # noqa: PLC0415

        progress_bar = st.progress(0.0)
        progress_label = st.empty()

        def _show_progress(progress: RunProgress) -> None:
            if progress.is_idle:
                progress_label.empty()
                return
            progress_bar.progress(progress.fraction)
            progress_label.caption(
                f"Processing: {progress.current_domain} ({progress.current} / {progress.total})"
            )

        orchestrator = PromptRunOrchestrator(
            adapter=_load_backend_handles()["adapter"],
            result_writer=result_store,
        )
        st.session_state.running = True
        try:
            outcome = orchestrator.run(
                template_store.selected_content(),
                selected_questions,
                st.session_state.selected_model,
                summary.records,
                summary.user_context,
                on_progress=_show_progress,
            )
        finally:
            st.session_state.running = False
        st.session_state.run_outcome = outcome
        progress_bar.empty()
        _guarded(result_store.refresh)

    outcome: RunOutcome | None = st.session_state.run_outcome
    if outcome is not None:
        if outcome.error_message:
            st.error(outcome.error_message)
        if outcome.results:
            st.success(f"Saved {len(outcome.results)} of {outcome.total_domains} domain results.")

# ── Results ────────────────────────────────────────────────────────────────
st.subheader("Results")
results = result_store.list()
if not results:
    st.info("No results yet. Run prompts to see results here.")
else:
    domains = result_store.domains()
    options = ["", *domains]
    current = st.session_state.results_domain if st.session_state.results_domain in domains else ""
    st.session_state.results_domain = st.selectbox(
        "Select Domain",
        options=options,
        index=options.index(current),
        format_func=lambda domain: domain or "-- Select a domain --",
    )

    selected_result = result_store.latest_for_domain(st.session_state.results_domain)
    if selected_result is not None:
        st.caption(f"Created: {selected_result.created_at:%Y-%m-%d %H:%M:%S}")
        if st.button("Delete", key=f"delete_result_{selected_result.id}"):
            try:
                result_store.delete(selected_result.id)
            except StoreError as exc:
                st.error(str(exc))
            else:
                st.session_state.results_domain = ""
                st.rerun()
        with st.expander("Input"):
            st.code(json.dumps(selected_result.prompt_input, indent=2, default=str), language="json")
        st.markdown("**Response**")
        st.markdown(selected_result.response)

    frame = _results_frame(results)
    csv_buffer = io.StringIO()
    frame.to_csv(csv_buffer, index=False)
    st.download_button(
        label="Download results CSV",
        data=csv_buffer.getvalue().encode("utf-8"),
        file_name="prompt_results.csv",
        mime="text/csv",
    )

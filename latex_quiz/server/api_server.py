"""FastAPI server that exposes the browser player and its JSON endpoints."""

from __future__ import annotations

from threading import Thread
import random
from typing import Callable

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from latex_quiz.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    SESSION_COOKIE_MAX_AGE_SECONDS,
    SESSION_COOKIE_NAME,
)
from latex_quiz.constants.translations import SUPPORTED_LANGUAGES, get_table
from latex_quiz.core.latex_renderer import renderer
from latex_quiz.core.question_store import QuestionStore
from latex_quiz.core.quiz_session import QuizSession, SessionStateError
from latex_quiz.core.scheduler import AsyncioScheduler, Scheduler
from latex_quiz.server.session_registry import SessionRegistry

_PLAYER_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>LaTeX Symbol Quiz</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #f3f4f6; color: #111827; }
      body { margin: 0; min-height: 100vh; display: flex; align-items: center; justify-content: center; padding: 1rem; box-sizing: border-box; }
      .lang { position: absolute; top: 1rem; right: 1rem; font-size: 0.9rem; }
      .lang button { background: none; border: none; cursor: pointer; color: #2563eb; }
      .card { background: #fff; border-radius: 1rem; box-shadow: 0 0.75rem 2rem rgba(0, 0, 0, 0.12); padding: 2rem; width: 100%; max-width: 28rem; text-align: center; }
      .hidden { display: none; }
      .stack { display: flex; flex-direction: column; gap: 0.5rem; }
      .level { border: none; border-radius: 0.5rem; padding: 0.6rem; color: #fff; font-size: 1rem; cursor: pointer; }
      .level:disabled { opacity: 0.45; cursor: not-allowed; }
      .level-easy { background: #22c55e; }
      .level-medium { background: #eab308; }
      .level-hard { background: #ef4444; }
      #progress { color: #6b7280; font-size: 0.9rem; margin-bottom: 0.5rem; }
      #question { font-size: 1.8rem; min-height: 4rem; margin-bottom: 1rem; }
      .fallback { color: #d13438; font-size: 1rem; }
      .entry { display: flex; align-items: center; border: 1px solid #d1d5db; border-radius: 0.5rem; padding: 0.5rem; }
      .entry span { color: #6b7280; padding: 0 0.5rem; }
      .entry input { flex: 1; border: none; outline: none; text-align: center; font-size: 1rem; }
      .action { margin-top: 1rem; border: none; border-radius: 0.5rem; padding: 0.6rem 1.2rem; color: #fff; background: #3b82f6; cursor: pointer; }
      .action.secondary { background: #6b7280; }
      #feedback { margin-top: 1rem; min-height: 2.5rem; }
      .correct { color: #16a34a; font-weight: 600; }
      .incorrect { color: #dc2626; font-weight: 600; }
      #final-score { font-size: 1.5rem; font-weight: 600; }
      #tier { font-size: 2.5rem; }
    </style>
  </head>
  <body>
    <div class=\"lang\">
      <button data-lang=\"en\">EN</button>
      <button data-lang=\"ja\">日本語</button>
    </div>
    <main class=\"card\">
      <h1 id=\"title\">LaTeX Symbol Quiz</h1>
      <section id=\"select-view\">
        <p id=\"select-label\"></p>
        <div class=\"stack\" id=\"levels\">
          <button class=\"level level-easy\" data-level=\"easy\"></button>
          <button class=\"level level-medium\" data-level=\"medium\"></button>
          <button class=\"level level-hard\" data-level=\"hard\"></button>
        </div>
      </section>
      <section id=\"quiz-view\" class=\"hidden\">
        <p id=\"progress\"></p>
        <div id=\"question\"></div>
        <div class=\"entry\">
          <span>\\</span>
          <input id=\"answer\" type=\"text\" autocomplete=\"off\" autocapitalize=\"off\" autocorrect=\"off\" spellcheck=\"false\" />
        </div>
        <button id=\"submit\" class=\"action\"></button>
        <div id=\"feedback\"></div>
      </section>
      <section id=\"result-view\" class=\"hidden\">
        <div id=\"tier\"></div>
        <p id=\"final-score\"></p>
        <p id=\"tier-label\"></p>
        <button id=\"restart\" class=\"action secondary\"></button>
      </section>
    </main>
    <script>
      const el = (id) => document.getElementById(id);
      let language = localStorage.getItem('latexQuizLanguage') || 'en';
      let t = {};
      let state = null;
      let pollHandle = null;

      async function api(path, body) {
        const options = body === undefined
          ? {}
          : { method: 'POST', headers: { 'Content-Type': 'application/json' }, body: JSON.stringify(body) };
        const response = await fetch(path, options);
        const payload = await response.json().catch(() => ({}));
        if (!response.ok) {
          throw new Error(payload.detail || response.statusText);
        }
        return payload;
      }

      async function loadLanguage(lang) {
        language = lang;
        localStorage.setItem('latexQuizLanguage', lang);
        t = await api(`/translations/${lang}`);
        document.documentElement.lang = lang;
        el('title').textContent = t.title;
        document.title = t.title;
        el('select-label').textContent = t.selectDifficulty;
        el('answer').placeholder = t.placeholder;
        el('submit').textContent = t.submit;
        el('restart').textContent = t.back;
        await loadDifficulties();
        if (state) render(state);
      }

      async function loadDifficulties() {
        const counts = await api('/difficulties');
        document.querySelectorAll('.level').forEach((button) => {
          const level = button.dataset.level;
          const available = (counts[level] || 0) > 0;
          button.textContent = available ? t[level] : `${t[level]} (${t.noQuestions})`;
          button.disabled = !available;
        });
      }

      function show(view) {
        ['select-view', 'quiz-view', 'result-view'].forEach((id) => el(id).classList.toggle('hidden', id !== view));
      }

      function renderFeedback(snapshot) {
        const feedback = el('feedback');
        feedback.innerHTML = '';
        if (snapshot.outcome === 'correct') {
          feedback.innerHTML = `<p class=\"correct\">${t.correct}</p>`;
        } else if (snapshot.outcome === 'incorrect') {
          const answers = snapshot.revealed_answers.map((a) => `<code>\\\\${escapeHtml(a)}</code>`).join(', ');
          feedback.innerHTML = `<p class=\"incorrect\">${t.incorrect}</p><p>${t.correctAnswer}: ${answers}</p>`;
        }
      }

      function escapeHtml(text) {
        const span = document.createElement('span');
        span.textContent = text;
        return span.innerHTML;
      }

      function render(snapshot) {
        const questionChanged = !state || state.position !== snapshot.position || state.state !== snapshot.state;
        state = snapshot;
        if (snapshot.state === 'idle') {
          show('select-view');
          return;
        }
        if (snapshot.state === 'finished') {
          show('result-view');
          el('final-score').textContent = `${t.score}: ${snapshot.score} / ${snapshot.total}`;
          el('tier').textContent = snapshot.tier_indicator || '';
          el('tier-label').textContent = snapshot.tier ? t[`tier_${snapshot.tier}`] : '';
          return;
        }
        show('quiz-view');
        el('progress').textContent = `${t.question} ${snapshot.question_number} ${t.of} ${snapshot.total}`;
        if (snapshot.invalid_markup) {
          el('question').innerHTML = `<span class=\"fallback\">${escapeHtml(snapshot.question_html)}</span>`;
        } else {
          el('question').innerHTML = snapshot.question_html || '';
        }
        const revealing = snapshot.state === 'revealing';
        el('answer').disabled = revealing;
        el('submit').disabled = revealing;
        if (questionChanged || revealing) {
          el('answer').value = snapshot.user_input;
        }
        if (!revealing && questionChanged) {
          el('answer').focus();
        }
        renderFeedback(snapshot);
        schedulePoll(revealing);
      }

      function schedulePoll(revealing) {
        if (pollHandle) {
          clearTimeout(pollHandle);
          pollHandle = null;
        }
        if (revealing) {
          pollHandle = setTimeout(async () => render(await api('/state')), 250);
        }
      }

      async function startQuiz(level) {
        render(await api('/start', { difficulty: level }));
      }

      function sanitizeAnswer(text) {
        return text.replace(/\\\\/g, '').replace(/\\s+/g, '');
      }

      async function sendInput() {
        const input = el('answer');
        const sent = sanitizeAnswer(input.value);
        if (input.value !== sent) {
          input.value = sent;
        }
        const snapshot = await api('/input', { text: sent });
        // Replies to older keystrokes must not clobber newer typing.
        if (input.value === sent && snapshot.user_input !== sent) {
          input.value = snapshot.user_input;
        }
      }

      async function submitAnswer() {
        if (!state || state.state !== 'in_progress') return;
        render(await api('/submit', { text: el('answer').value }));
      }

      async function restart() {
        render(await api('/restart', {}));
      }

      document.querySelectorAll('.lang button').forEach((button) => {
        button.addEventListener('click', () => loadLanguage(button.dataset.lang));
      });
      document.querySelectorAll('.level').forEach((button) => {
        button.addEventListener('click', () => startQuiz(button.dataset.level));
      });
      el('answer').addEventListener('input', sendInput);
      el('answer').addEventListener('keydown', (event) => {
        if (event.key === 'Enter') submitAnswer();
      });
      el('submit').addEventListener('click', submitAnswer);
      el('restart').addEventListener('click', restart);

      (async () => {
        await loadLanguage(language);
        render(await api('/state'));
      })().catch((error) => console.error('Unable to reach the quiz server:', error));
    </script>
  </body>
</html>
"""


class StartPayload(BaseModel):
    """Payload schema for starting a quiz."""

    difficulty: str


class InputPayload(BaseModel):
    """Payload schema for keystroke updates."""

    text: str


class SubmitPayload(BaseModel):
    """Payload schema for answer submission; ``text`` is applied as input first."""

    text: str | None = None


def _serialize(session: QuizSession) -> dict[str, object]:
    payload = session.snapshot().to_dict()
    markup = payload["markup"]
    question_html = None
    invalid_markup = False
    if isinstance(markup, str):
        question_html = renderer.render_fragment(markup, display_mode=True)
        invalid_markup = renderer.is_fallback(question_html)
    payload["question_html"] = question_html
    payload["invalid_markup"] = invalid_markup
    return payload


def create_api_app(
    question_store: QuestionStore,
    scheduler_factory: Callable[[], Scheduler] = AsyncioScheduler,
    rng_factory: Callable[[], random.Random] = random.Random,
) -> FastAPI:
    """Create a FastAPI application serving quizzes from ``question_store``.

    Endpoints are ``async`` so every transition and every reveal timer runs on
    the event loop thread.
    """
    app = FastAPI(title="LaTeX Symbol Quiz API", version="0.1.0")
    registry = SessionRegistry(question_store, scheduler_factory, rng_factory=rng_factory)
    app.state.session_registry = registry

    async def session_dependency(request: Request, response: Response) -> QuizSession:
        current_id = request.cookies.get(SESSION_COOKIE_NAME)
        session_id, session = registry.get_or_create(current_id)
        if session_id != current_id:
            response.set_cookie(
                key=SESSION_COOKIE_NAME,
                value=session_id,
                max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
                samesite="lax",
                httponly=True,
            )
        return session

    @app.get("/", response_class=HTMLResponse)
    async def serve_player_page() -> str:
        return _PLAYER_PAGE_HTML

    @app.get("/translations/{language}")
    async def get_translations(language: str) -> dict[str, str]:
        if language not in SUPPORTED_LANGUAGES:
            raise HTTPException(status_code=404, detail=f"Unsupported language '{language}'.")
        return get_table(language)

    @app.get("/difficulties")
    async def get_difficulties() -> dict[str, int]:
        return {
            difficulty.value: count
            for difficulty, count in question_store.count_by_difficulty().items()
        }

    @app.get("/state")
    async def get_state(session: QuizSession = Depends(session_dependency)) -> dict[str, object]:
        return _serialize(session)

    @app.post("/start")
    async def start_quiz(
        payload: StartPayload,
        session: QuizSession = Depends(session_dependency),
    ) -> dict[str, object]:
        try:
            session.start(payload.difficulty)
        except SessionStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _serialize(session)

    @app.post("/input")
    async def update_input(
        payload: InputPayload,
        session: QuizSession = Depends(session_dependency),
    ) -> dict[str, object]:
        try:
            session.update_input(payload.text)
        except SessionStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize(session)

    @app.post("/submit")
    async def submit_answer(
        payload: SubmitPayload,
        session: QuizSession = Depends(session_dependency),
    ) -> dict[str, object]:
        try:
            if payload.text is not None:
                session.update_input(payload.text)
            session.submit()
        except SessionStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _serialize(session)

    @app.post("/restart")
    async def restart_quiz(session: QuizSession = Depends(session_dependency)) -> dict[str, object]:
        session.restart()
        return _serialize(session)

    return app


def start_api_server(
    app: FastAPI,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread

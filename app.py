"""
AgriLearn - Farmer Education App

Streamlit application with personalized micro-lessons, offline lesson cache,
narrated slide playback, quizzes, voice Q&A and a farming chat assistant in
English, Hindi and Kannada.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st

from agrilearn.classroom import (
    EducationSession,
    LessonPlayer,
    LessonStore,
    Notice,
    OfflineCache,
    VirtualScheduler,
    probe_connectivity,
)
from agrilearn.config import Settings, setup_logging
from agrilearn.errors import ConfigurationError, DictationError
from agrilearn.generation import GeminiClient, GenerationService
from agrilearn.schemas import Lesson
from agrilearn.utils.i18n import (
    CROP_TYPES,
    LANGUAGES,
    LESSON_TYPES,
    REGIONS,
    SEASONS,
    t,
)
from agrilearn.viewer import (
    get_player_css,
    get_quiz_css,
    render_key_points,
    render_lesson_card,
    render_quiz_question,
    render_quiz_result,
    render_quiz_score,
    render_slide,
)
from agrilearn.voice import CloudNarrator, RecordedClipDictation, transcribe


logger = logging.getLogger(__name__)

# Longest sleep between playback reruns, in seconds
PLAYBACK_TICK = 1.0

st.set_page_config(
    page_title="AgriLearn",
    page_icon="🌾",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def build_service(settings: Settings) -> GenerationService | None:
    """Create the generation service, or None if no API key is configured."""
    try:
        client = GeminiClient(api_key=settings.gemini_api_key, model=settings.model)
    except ConfigurationError as e:
        logger.warning(f"Generation disabled: {e}")
        return None
    return GenerationService(client)


def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        settings = Settings.from_env()
        setup_logging(settings.log_level)
        st.session_state.settings = settings

    settings = st.session_state.settings

    if "cache" not in st.session_state:
        st.session_state.cache = OfflineCache(
            LessonStore(settings.db_path),
            is_online=check_online(settings),
        )

    if "narrator" not in st.session_state:
        st.session_state.narrator = CloudNarrator()

    if "session" not in st.session_state:
        st.session_state.session = EducationSession(
            st.session_state.cache,
            build_service(settings),
            narrator=st.session_state.narrator,
        )

    if "scheduler" not in st.session_state:
        st.session_state.scheduler = VirtualScheduler()
        st.session_state.last_tick = time.monotonic()

    if "player" not in st.session_state:
        st.session_state.player = None

    if "notices" not in st.session_state:
        st.session_state.notices = []


def check_online(settings: Settings) -> bool:
    if settings.force_offline:
        return False
    return probe_connectivity(settings.probe_host, settings.probe_port, timeout=1.5)


def push_notice(notice: Notice | None):
    if notice is not None:
        st.session_state.notices.append(notice)


def render_notices():
    """Show and clear queued notices."""
    for notice in st.session_state.notices:
        message = f"**{notice.title}**"
        if notice.description:
            message += f"  \n{notice.description}"
        if notice.kind == "error":
            st.error(message)
        elif notice.kind == "success":
            st.success(message)
        else:
            st.info(message)
    st.session_state.notices = []


def play_pending_audio():
    """Play the latest narration clip once."""
    narrator = st.session_state.narrator
    if not narrator.is_supported:
        return
    audio = narrator.take_unplayed_audio()
    if audio:
        st.audio(audio, format="audio/mp3", autoplay=True)


# -----------------------------------------------------------------------------
# Sidebar: Language, Connectivity, Personalization
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with language, status and personalization."""
    session: EducationSession = st.session_state.session
    cache: OfflineCache = st.session_state.cache

    st.sidebar.title("🌾 AgriLearn")

    language_ids = [lang["id"] for lang in LANGUAGES]
    language = st.sidebar.selectbox(
        t("language", session.language),
        language_ids,
        index=language_ids.index(session.language),
        format_func=lambda lang_id: next(item["label"] for item in LANGUAGES if item["id"] == lang_id),
    )
    if language != session.language:
        session.set_language(language)
        if st.session_state.player is not None:
            st.session_state.player.set_language(language)

    cache.set_online(check_online(st.session_state.settings))
    lang = session.language
    status = t("online", lang) if cache.is_online else t("offline", lang)
    st.sidebar.markdown(f"**{status}**")
    st.sidebar.markdown(
        f"📥 {len(cache.cached_lessons)}/{cache.max_cache_size} {t('saved_count', lang)}"
    )
    if cache.sync_queue_size:
        st.sidebar.caption(f"🔄 {cache.sync_queue_size} {t('pending_sync', lang)}")

    st.sidebar.divider()
    st.sidebar.subheader(t("preferences", lang))

    session.crop = catalog_select(t("crop", lang), CROP_TYPES, session.crop, lang)
    session.region = catalog_select(t("region", lang), REGIONS, session.region, lang)
    session.season = catalog_select(t("season", lang), SEASONS, session.season, lang)
    session.lesson_type = catalog_select(
        t("lesson_type", lang), LESSON_TYPES, session.lesson_type, lang
    )


def catalog_select(label: str, catalog: list[dict], current: str, language: str) -> str:
    ids = [item["id"] for item in catalog]
    labels = {
        item["id"]: f"{item.get('emoji', '')} {item.get(language) or item['en']}".strip()
        for item in catalog
    }
    return st.sidebar.selectbox(
        label,
        ids,
        index=ids.index(current) if current in ids else 0,
        format_func=lambda item_id: labels[item_id],
    )


# -----------------------------------------------------------------------------
# Lessons
# -----------------------------------------------------------------------------

def open_lesson(lesson: Lesson):
    """Start a fresh player for a lesson, closing any open one."""
    close_player()
    session: EducationSession = st.session_state.session

    def on_complete():
        push_notice(session.complete_lesson(lesson))

    st.session_state.player = LessonPlayer(
        lesson,
        st.session_state.scheduler,
        narrator=st.session_state.narrator,
        language=session.language,
        on_complete=on_complete,
    )


def close_player():
    player = st.session_state.player
    if player is not None:
        player.close()
    st.session_state.player = None


def tick_playback():
    """Advance the playback clock by the wall time since the last rerun."""
    now = time.monotonic()
    elapsed = now - st.session_state.last_tick
    st.session_state.last_tick = now
    st.session_state.scheduler.advance(elapsed)


def render_player():
    player: LessonPlayer | None = st.session_state.player
    if player is None:
        return
    lang = player.language

    st.markdown(get_player_css(), unsafe_allow_html=True)
    st.subheader(player.title)
    slide = player.current_slide
    st.markdown(
        render_slide(
            player.current_title,
            player.current_text,
            slide.emoji,
            player.current_index,
            player.total_slides,
            player.progress,
            language=lang,
        ),
        unsafe_allow_html=True,
    )
    if player.show_key_points:
        st.markdown(
            render_key_points(player.key_points, player.practical_tip, language=lang),
            unsafe_allow_html=True,
        )

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        if st.button(t("previous", lang), disabled=player.is_first, use_container_width=True):
            player.prev_slide()
            st.rerun()
    with col2:
        label = t("pause", lang) if player.is_playing else t("play", lang)
        if st.button(label, type="primary", use_container_width=True):
            player.toggle_play()
            st.rerun()
    with col3:
        if st.button(t("next", lang), disabled=player.is_last, use_container_width=True):
            player.next_slide()
            st.rerun()
    with col4:
        voice_label = t("stop_listening", lang) if player.is_speaking else t("listen", lang)
        if st.button(voice_label, disabled=not player.can_narrate, use_container_width=True):
            player.toggle_voice()
            st.rerun()
    with col5:
        if st.button(t("close", lang), use_container_width=True):
            close_player()
            st.rerun()

    play_pending_audio()


def render_lessons_tab():
    session: EducationSession = st.session_state.session
    lang = session.language

    if st.button(
        t("generate_lesson", lang),
        type="primary",
        disabled=session.is_generating,
    ):
        with st.spinner(t("generating", lang)):
            push_notice(session.generate_lesson())
        st.rerun()

    render_player()

    lessons = session.lessons
    if not lessons:
        st.info(t("no_lessons", lang))
        return

    st.markdown(get_player_css(), unsafe_allow_html=True)
    columns = st.columns(3)
    for idx, lesson in enumerate(lessons):
        with columns[idx % 3]:
            saved = session.is_saved(lesson)
            st.markdown(render_lesson_card(lesson, lang, saved=saved), unsafe_allow_html=True)
            col_play, col_save = st.columns(2)
            with col_play:
                if st.button(t("play", lang), key=f"play_{lesson.id}", use_container_width=True):
                    open_lesson(lesson)
                    st.rerun()
            with col_save:
                if st.button(
                    t("save_offline", lang),
                    key=f"save_{lesson.id}",
                    disabled=saved,
                    use_container_width=True,
                ):
                    push_notice(session.save_lesson(lesson))
                    st.rerun()


# -----------------------------------------------------------------------------
# Quiz
# -----------------------------------------------------------------------------

def render_quiz_tab():
    session: EducationSession = st.session_state.session
    lang = session.language
    quiz = session.quiz_session

    if quiz is None or quiz.is_complete:
        if quiz is not None:
            st.markdown(get_quiz_css(), unsafe_allow_html=True)
            st.markdown(render_quiz_score(quiz.score_info(), lang), unsafe_allow_html=True)
        label = t("try_again", lang) if quiz is not None else t("start_quiz", lang)
        if st.button(label, type="primary"):
            with st.spinner("..."):
                push_notice(session.start_quiz())
            st.rerun()
        return

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.progress(quiz.progress / 100)
    st.markdown(
        render_quiz_question(quiz.question_text, quiz.current_index, quiz.total),
        unsafe_allow_html=True,
    )
    if st.button(t("listen", lang), key="quiz_listen", disabled=not st.session_state.narrator.is_supported):
        quiz.speak_question()

    options = quiz.current_options
    for idx, option in enumerate(options):
        marker = "🔘" if quiz.selected == idx else "⚪"
        if st.button(
            f"{marker} {option}",
            key=f"quiz_opt_{quiz.current_index}_{idx}",
            disabled=quiz.show_result,
            use_container_width=True,
        ):
            quiz.select(idx)
            st.rerun()

    if not quiz.show_result:
        if st.button(t("check_answer", lang), type="primary", disabled=quiz.selected is None):
            quiz.submit()
            st.rerun()
    else:
        correct_option = options[quiz.current_question.correct_index]
        st.markdown(
            render_quiz_result(quiz.last_answer_correct, correct_option, quiz.explanation, lang),
            unsafe_allow_html=True,
        )
        label = t("see_results", lang) if quiz.is_last else t("next_question", lang)
        if st.button(label, type="primary"):
            quiz.next_question()
            push_notice(session.quiz_result_notice())
            st.rerun()

    play_pending_audio()


# -----------------------------------------------------------------------------
# Q&A and Chat
# -----------------------------------------------------------------------------

def render_qa_tab():
    session: EducationSession = st.session_state.session
    lang = session.language

    clip = st.audio_input(t("speak_question", lang))
    if clip is not None and st.session_state.get("last_clip_id") != clip.file_id:
        st.session_state.last_clip_id = clip.file_id
        try:
            spoken = transcribe(RecordedClipDictation(clip.getvalue()), lang)
        except DictationError as e:
            logger.error(f"Dictation failed: {e}")
            spoken = ""
        if spoken:
            st.session_state.qa_input = spoken
        else:
            st.warning(t("not_heard", lang))

    with st.form("qa_form", clear_on_submit=True):
        question = st.text_area(t("ask_placeholder", lang), key="qa_input", max_chars=500)
        submitted = st.form_submit_button(t("ask", lang), type="primary")
    if submitted and question.strip():
        with st.spinner("..."):
            push_notice(session.ask_question(question))
        st.rerun()

    for answer in session.qa_history:
        with st.container(border=True):
            st.markdown(f"**❓ {answer.question}**")
            st.markdown(answer.answer.resolve(lang))
            if answer.follow_up_suggestions:
                st.caption(f"{t('follow_ups', lang)}: " + " · ".join(answer.follow_up_suggestions))

    play_pending_audio()


def render_chat_tab():
    session: EducationSession = st.session_state.session
    lang = session.language

    for message in session.chat_history:
        with st.chat_message(message.role):
            st.markdown(message.resolve(lang))

    prompt = st.chat_input(t("chat_placeholder", lang))
    if prompt:
        with st.spinner("..."):
            push_notice(session.send_chat(prompt))
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    tick_playback()
    render_sidebar()

    session: EducationSession = st.session_state.session
    lang = session.language

    st.title(t("app_title", lang))
    st.caption(t("app_subtitle", lang))
    render_notices()

    lessons_tab, quiz_tab, qa_tab, chat_tab = st.tabs([
        t("tab_lessons", lang),
        t("tab_quiz", lang),
        t("tab_qa", lang),
        t("tab_chat", lang),
    ])
    with lessons_tab:
        render_lessons_tab()
    with quiz_tab:
        render_quiz_tab()
    with qa_tab:
        render_qa_tab()
    with chat_tab:
        render_chat_tab()

    # Keep auto-advance running while a lesson plays
    player = st.session_state.player
    if player is not None and player.is_playing:
        scheduler = st.session_state.scheduler
        due = scheduler.next_due()
        wait = PLAYBACK_TICK if due is None else min(PLAYBACK_TICK, max(0.1, due - scheduler.now))
        time.sleep(wait)
        st.rerun()


if __name__ == "__main__":
    main()

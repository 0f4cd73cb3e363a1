"""NiceGUI login page."""

from fastapi.responses import RedirectResponse
from nicegui import app, ui

from docchat.ui.api_client import ApiClient, ApiError
from docchat.ui.chat_page import CUSTOM_CSS


def is_logged_in() -> bool:
    return bool(app.storage.user.get("login_session"))


@ui.page("/login")
def login_page() -> RedirectResponse | None:
    """Username/password form; on success the login is kept in user storage."""
    if is_logged_in():
        return RedirectResponse("/")

    ui.add_head_html(CUSTOM_CSS)

    async def try_login() -> None:
        if not username.value or not password.value:
            ui.notify("Enter your username and password", type="warning")
            return
        submit.disable()
        try:
            result = await ApiClient().login(username.value.strip(), password.value)
        except ApiError as e:
            ui.notify(str(e), type="negative")
            password.value = ""
            return
        finally:
            submit.enable()

        app.storage.user.update(
            login_session=result["sessionId"],
            username=result["user"]["username"],
        )
        ui.navigate.to("/")

    with (
        ui.element("div").classes("w-full min-h-screen flex items-center justify-center p-4"),
        ui.card().classes("app-container w-full max-w-sm p-0"),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center gap-3"):
            ui.icon("description").classes("text-white text-3xl")
            ui.label("Document Assistant").classes("text-lg font-semibold text-white")
        with ui.column().classes("w-full p-6 gap-4"):
            username = ui.input("Username").props("outlined dense").classes("w-full")
            password = (
                ui.input("Password", password=True, password_toggle_button=True)
                .props("outlined dense")
                .classes("w-full")
                .on("keydown.enter", try_login)
            )
            submit = (
                ui.button("Sign in", on_click=try_login)
                .props("unelevated")
                .classes("send-btn w-full text-white")
            )
    return None

"""Static guide texts and canned admin replies."""

GUIDE_SHORT = (
    "Use the buttons below to see how to upload files or how to get the download link."
)

GUIDE_UPLOAD = (
    "📤 *How to upload & get link*\n\n"
    "1. Send me a *video*, *document*, or *photo* (as a file).\n"
    "2. Optionally add a caption (e.g. @username).\n"
    "3. I will reply with a *link* (e.g. https://t.me/YourBot?start=xxx).\n"
    "4. Share that link with anyone; when they open it, they get the file "
    "(after joining your channels if required).\n\n"
    "Authenticate first with `/login <password>` (the password is stored in the bot config)."
)

GUIDE_GET_LINK = (
    "🔗 *How to get the file from a link*\n\n"
    "1. Open the link you received (e.g. https://t.me/YourBot?start=xxx).\n"
    "2. If asked, join the required channels using the buttons, then press Start "
    "again or open the link again.\n"
    "3. The bot will send you the file. Videos are deleted after a short time; "
    "save them if needed."
)

FULL_GUIDE = f"{GUIDE_SHORT}\n\n---\n\n{GUIDE_UPLOAD}\n\n---\n\n{GUIDE_GET_LINK}"

LOGIN_USAGE = "Usage: /login <password>"
LOGIN_INVALID = "Invalid password."
LOGIN_OK = (
    "You are now authenticated as admin. You can upload videos and run admin commands."
)
LOGOUT_NOT_LOGGED_IN = "You are not logged in."
LOGOUT_OK = "Logged out from admin mode."

SETCAPTION_USAGE = "Usage: /setcaption <file_key> <new caption>"
SETCAPTION_EMPTY = "Caption cannot be empty."
SETCAPTION_FAILED = "Failed to update caption."

SETTAG_USAGE = "Usage: /settag @new_tag"
PERSIST_FAILED = "Failed to persist config"

UPLOAD_FAILED = "Failed to save file."


def link_created(url: str) -> str:
    return f"File link created:\n{url}"


def caption_prompt(key: str, caption: str) -> str:
    return (
        f"Caption saved as:\n{caption}\n"
        "If you'd like to change it before users open the link, send:\n"
        f"/setcaption {key} <new caption>"
    )


def caption_updated(key: str) -> str:
    return f"Caption for {key} updated."


def tag_updated(tag: str) -> str:
    return f"Default tag updated to {tag}"

import logging

from .errors import NotificationError

LOG = logging.getLogger("uc-updater-notify")


def outdated_message(current_version: str, latest_version: str) -> str:
    return (
        f"Current Ungoogled Chromium Version: {current_version}\n"
        f"Latest Windows 64-bit x86 release: {latest_version}\n\n"
        "Browser outdated. Please download the latest version."
    )


def up_to_date_message(current_version: str) -> str:
    return f"Current Ungoogled Chromium Version: {current_version}\n\nYour browser is up to date."


async def notify_outdated(host, current_version: str, latest_version: str, download_url: str) -> bool:
    """
    Open the download page and show the outdated alert in it.
    Returns False if either step failed; failures are logged, never raised.
    """
    message = outdated_message(current_version, latest_version)
    try:
        page = await host.open_page(download_url)
        await host.show_alert(page, message)
        return True
    except NotificationError as e:
        LOG.warning("Outdated notification failed, page may not allow scripts (e.g. chrome:// URLs): %s", e)
        return False


async def notify_up_to_date(host, current_version: str) -> bool:
    message = up_to_date_message(current_version)
    try:
        page = await host.active_page()
        await host.show_alert(page, message)
        return True
    except NotificationError as e:
        LOG.warning("Up-to-date notification failed, page may not allow scripts (e.g. chrome:// URLs): %s", e)
        return False

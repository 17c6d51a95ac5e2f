import requests

from showing_service import config
from showing_service.logger import logger


def _url(path: str) -> str:
    return f"{config.SHOWING_SERVICE_URL}{path}"


def get_seats(showing_id: str) -> list:
    """Получить места сеанса (пустой список, если сервис недоступен)"""
    try:
        response = requests.get(_url(f"/showings/{showing_id}/seats"), timeout=config.CLIENT_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        logger.error(f"Showing Service unavailable: {e}")
        return []


def check_seat_available(showing_id: str, row: str, number: int) -> bool:
    """Проверить доступность места"""
    for seat in get_seats(showing_id):
        if seat["row"] == row.upper() and seat["number"] == number:
            return not seat["occupied"]
    return False


def reserve_seat(showing_id: str, row: str, number: int, user_id: str = None) -> bool:
    """Занять место; False, если место уже занято или сервис недоступен"""
    headers = {"X-User-Id": user_id} if user_id else {}
    try:
        response = requests.post(
            _url(f"/showings/{showing_id}/seats/{row}/{number}/reserve"),
            headers=headers,
            timeout=config.CLIENT_TIMEOUT
        )
        if response.status_code == 409:
            logger.warning(f"Seat {row}{number} of {showing_id} already occupied")
            return False
        response.raise_for_status()
        logger.info(f"Seat {row}{number} of {showing_id} reserved")
        return True
    except requests.RequestException as e:
        logger.error(f"Failed to reserve seat: {e}")
        return False


def release_seat(showing_id: str, row: str, number: int, user_id: str = None) -> bool:
    """Освободить место"""
    headers = {"X-User-Id": user_id} if user_id else {}
    try:
        response = requests.post(
            _url(f"/showings/{showing_id}/seats/{row}/{number}/release"),
            headers=headers,
            timeout=config.CLIENT_TIMEOUT
        )
        response.raise_for_status()
        logger.info(f"Seat {row}{number} of {showing_id} released")
        return True
    except requests.RequestException as e:
        logger.error(f"Failed to release seat: {e}")
        return False


def get_combo_total(combo_name: str):
    """Цена комбо со скидкой или None"""
    try:
        response = requests.get(_url(f"/combos/{combo_name}"), timeout=config.CLIENT_TIMEOUT)
        response.raise_for_status()
        return response.json()["total_price"]
    except requests.RequestException as e:
        logger.error(f"Failed to get combo {combo_name}: {e}")
        return None

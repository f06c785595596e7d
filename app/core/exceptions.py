class MealNotFoundError(Exception):
    """Прием пищи с указанным id отсутствует в БД."""

    def __init__(self, meal_id, message: str = "Meal not found"):
        super().__init__(message)
        self.meal_id = meal_id
        self.message = message


class EmailAlreadyRegisteredError(Exception):
    """Пользователь с таким email уже существует."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email

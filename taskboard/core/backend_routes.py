class BackendRoutes:
    # Auth (the backend really spells it "varification")
    CREATE_USER = "/auth/create-user"
    LOGIN = "/auth/user-varification/login"
    SEND_OTP = "/auth/user-varification/send"
    VERIFY_OTP = "/auth/user-varification/verify"
    IS_VERIFIED = "/auth/user-varification/is-verified"
    FORGET_PASSWORD = "/auth/user-varification/forget-password"
    RESET_PASSWORD = "/auth/user-varification/reset-password"

    # Tasks
    TASKS = "/tasks"
    TASK = "/tasks/{task_id}"

    # Users
    USER = "/user/{user_id}"

    # Never sent an Authorization header
    PUBLIC_ENDPOINTS = [
        CREATE_USER,
        LOGIN,
        FORGET_PASSWORD,
        RESET_PASSWORD,
    ]
    PUBLIC_PREFIXES = [
        "/public/",
    ]

    # Where the UI goes after a forced logout
    LOGIN_ENTRY_POINT = "/login"

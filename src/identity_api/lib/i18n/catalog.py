"""In-process message catalogs for English, Japanese and Simplified Chinese."""

from loguru import logger

from identity_api.lib.i18n.locale import DEFAULT_LOCALE, Locale

_MESSAGES: dict[Locale, dict[str, str]] = {
    Locale.EN: {
        "auth.register.success": "Registration completed",
        "error.user.already.exists": "Username already exists",
        "error.authentication.failed": "Authentication failed",
        "error.validation.error": "Invalid input data",
        "error.internal.server.error": "An internal server error occurred",
        "error.unauthorized": "Could not validate credentials",
        "menu.user.management": "User Management",
        "menu.system.settings": "System Settings",
        "menu.sales.management": "Sales Management",
        "menu.customer.management": "Customer Management",
        "menu.reports": "Reports",
        "menu.profile": "Profile",
        "menu.settings": "Settings",
        "validation.username.required": "Username is required",
        "validation.username.size": "Username must be between 3 and 50 characters",
        "validation.username.pattern": "Username may only contain letters, digits and underscores",
        "validation.password.required": "Password is required",
        "validation.password.size": "Password must be between 8 and 100 characters",
        "validation.password.pattern": "Password must contain an uppercase letter, a lowercase letter and a digit",
        "validation.email.required": "Email is required",
        "validation.email.size": "Email must be at most 100 characters",
        "validation.email.invalid": "Enter a valid email address",
        "validation.role.invalid": "Role must be one of ADMIN, USER, SALES",
        "validation.login.username.size": "Username must be at most 50 characters",
        "validation.login.password.size": "Password must be at most 100 characters",
        "validation.type.string": "Value must be a string",
        "validation.body.invalid": "Request body must be a JSON object",
    },
    Locale.JA: {
        "auth.register.success": "登録が完了しました",
        "error.user.already.exists": "ユーザー名が既に存在します",
        "error.authentication.failed": "認証に失敗しました",
        "error.validation.error": "入力データに不正があります",
        "error.internal.server.error": "内部サーバーエラーが発生しました",
        "error.unauthorized": "認証情報を確認できませんでした",
        "menu.user.management": "ユーザー管理",
        "menu.system.settings": "システム設定",
        "menu.sales.management": "営業管理",
        "menu.customer.management": "顧客管理",
        "menu.reports": "レポート",
        "menu.profile": "プロフィール",
        "menu.settings": "設定",
        "validation.username.required": "ユーザー名は必須です",
        "validation.username.size": "ユーザー名は3文字以上50文字以下で入力してください",
        "validation.username.pattern": "ユーザー名は英数字とアンダースコアのみ使用可能です",
        "validation.password.required": "パスワードは必須です",
        "validation.password.size": "パスワードは8文字以上100文字以下で入力してください",
        "validation.password.pattern": "パスワードは大文字、小文字、数字を含む必要があります",
        "validation.email.required": "メールアドレスは必須です",
        "validation.email.size": "メールアドレスは100文字以下で入力してください",
        "validation.email.invalid": "有効なメールアドレスを入力してください",
        "validation.role.invalid": "ロールは ADMIN, USER, SALES のいずれかです",
        "validation.login.username.size": "ユーザー名は50文字以下で入力してください",
        "validation.login.password.size": "パスワードは100文字以下で入力してください",
    },
    Locale.ZH: {
        "auth.register.success": "注册成功",
        "error.user.already.exists": "用户名已存在",
        "error.authentication.failed": "认证失败",
        "error.validation.error": "输入数据无效",
        "error.internal.server.error": "服务器内部错误",
        "error.unauthorized": "无法验证凭据",
        "menu.user.management": "用户管理",
        "menu.system.settings": "系统设置",
        "menu.sales.management": "销售管理",
        "menu.customer.management": "客户管理",
        "menu.reports": "报表",
        "menu.profile": "个人资料",
        "menu.settings": "设置",
        "validation.username.required": "用户名为必填项",
        "validation.username.size": "用户名长度须为3到50个字符",
        "validation.username.pattern": "用户名只能包含字母、数字和下划线",
        "validation.password.required": "密码为必填项",
        "validation.password.size": "密码长度须为8到100个字符",
        "validation.password.pattern": "密码须包含大写字母、小写字母和数字",
        "validation.email.required": "邮箱为必填项",
        "validation.email.size": "邮箱长度不能超过100个字符",
        "validation.email.invalid": "请输入有效的邮箱地址",
    },
}


class MessageCatalog:
    """Resolves message keys to localized text.

    Lookup order: requested locale, then the default locale, then the key
    itself so a missing translation never breaks a response.
    """

    def __init__(
        self,
        messages: dict[Locale, dict[str, str]] | None = None,
        default_locale: Locale = DEFAULT_LOCALE,
    ) -> None:
        self._messages = messages if messages is not None else _MESSAGES
        self._default_locale = default_locale

    @property
    def default_locale(self) -> Locale:
        return self._default_locale

    def resolve(self, key: str, locale: Locale | str | None = None) -> str:
        """Return the message for ``key`` in ``locale``.

        Args:
            key: Dotted message key, e.g. ``"error.authentication.failed"``.
            locale: Target locale; the default locale when omitted.

        Returns:
            The localized message, or the key when no catalog defines it.
        """
        target = Locale.parse(locale, self._default_locale) if locale else self._default_locale
        message = self._messages.get(target, {}).get(key)
        if message is not None:
            return message

        logger.warning(f"Message not found: key={key}, locale={target}")
        message = self._messages.get(self._default_locale, {}).get(key)
        if message is not None:
            return message

        logger.error(f"Default message not found either: key={key}")
        return key

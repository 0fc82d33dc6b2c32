ALL = "all"

# вкладки витрины
TAB_CATALOG = "catalog"
TAB_HOT = "hot"
TAB_ORDERS = "orders"
TAB_REQUEST = "request"

TABS = {
    TAB_CATALOG: "Каталог",
    TAB_HOT: "Горячее",
    TAB_ORDERS: "Мои заказы",
    TAB_REQUEST: "Подбор",
}

CONTACT_TELEGRAM = "telegram"
CONTACT_WHATSAPP = "whatsapp"
CONTACT_CALL = "call"

CONTACT_METHODS = {
    CONTACT_TELEGRAM: "Telegram",
    CONTACT_WHATSAPP: "WhatsApp",
    CONTACT_CALL: "Звонок",
}

PAYLOAD_ORDER = "order"
PAYLOAD_CUSTOM_REQUEST = "custom_request"

MAIN_BUTTON_TEXT = "Перейти к оформлению"

MSG_FILL_CONTACTS = "Заполните имя и телефон, пожалуйста."
MSG_EMPTY_CART = "Корзина пуста. Добавьте позиции из каталога."
MSG_ORDER_SENT = "Заявка отправлена менеджеру. Мы свяжемся с вами лично."
MSG_REQUEST_SENT = "Запрос отправлен. Менеджер свяжется с вами лично."
MSG_PREVIEW = "(Превью) Данные для менеджера:"

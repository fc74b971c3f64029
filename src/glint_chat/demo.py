"""
Demo replies used when a category has no credential configured.
"""

from typing import Union

from glint_chat.models.chat import Category, Language

_TEMPLATES: dict[Category, dict[Language, str]] = {
    Category.TEXT: {
        Language.ROMAN_URDU: (
            "Main tumhara message receive kar liya! Yeh Text API ka demo response hai, Guru. "
            "Text API key configure karein actual AI responses ke liye."
        ),
        Language.URDU: (
            "میں نے آپ کا پیغام وصول کر لیا ہے! یہ ٹیکسٹ API کا ڈیمو جواب ہے، گرو۔ "
            "حقیقی AI جوابات کے لیے ٹیکسٹ API کنفیگر کریں۔"
        ),
        Language.ENGLISH: (
            "I have received your message! This is a Text API demo response. "
            "Configure Text API key for actual AI responses."
        ),
    },
    Category.IMAGE: {
        Language.ROMAN_URDU: (
            '🖼️ Image Generation Demo\n\nPrompt: "{message}"\n\n'
            "(Actual image generation ke liye Image API key configure karein)"
        ),
        Language.URDU: (
            '🖼️ امیج جنریشن ڈیمو\n\nپرامپٹ: "{message}"\n\n'
            "(حقیقی امیج جنریشن کے لیے امیج API کنفیگر کریں)"
        ),
        Language.ENGLISH: (
            '🖼️ Image Generation Demo\n\nPrompt: "{message}"\n\n'
            "(Configure Image API key for actual image generation)"
        ),
    },
    Category.VOICE: {
        Language.ROMAN_URDU: (
            '🎤 Voice Processing Demo\n\nRequest: "{message}"\n\n'
            "(Actual voice processing ke liye Voice API key configure karein)"
        ),
        Language.URDU: (
            '🎤 وائس پروسیسنگ ڈیمو\n\nدرخواست: "{message}"\n\n'
            "(حقیقی وائس پروسیسنگ کے لیے وائس API کنفیگر کریں)"
        ),
        Language.ENGLISH: (
            '🎤 Voice Processing Demo\n\nRequest: "{message}"\n\n'
            "(Configure Voice API key for actual voice processing)"
        ),
    },
    Category.CODING: {
        Language.ROMAN_URDU: (
            '💻 Code Generation Demo\n\nRequest: "{message}"\n\n'
            "(Actual code generation ke liye Coding API key configure karein)"
        ),
        Language.URDU: (
            '💻 کوڈ جنریشن ڈیمو\n\nدرخواست: "{message}"\n\n'
            "(حقیقی کوڈ جنریشن کے لیے کوڈنگ API کنفیگر کریں)"
        ),
        Language.ENGLISH: (
            '💻 Code Generation Demo\n\nRequest: "{message}"\n\n'
            "(Configure Coding API key for actual code generation)"
        ),
    },
}


def fallback(language: Union[Language, str], category: Union[Category, str], user_message: str) -> str:
    """Localized placeholder reply. Unknown languages get the English text."""
    table = _TEMPLATES[Category(category)]
    try:
        template = table[Language(language)]
    except ValueError:
        template = table[Language.ENGLISH]
    # str.replace, not format(): user text may contain braces
    return template.replace("{message}", user_message)

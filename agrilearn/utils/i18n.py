"""
UI strings and selection catalogs in English, Hindi and Kannada.

`t(key, language)` looks up a message; unknown languages and missing
translations fall back to English.
"""

from datetime import date
from typing import Optional


# -----------------------------------------------------------------------------
# Catalogs
# -----------------------------------------------------------------------------

LESSON_TYPES = [
    {"id": "pest", "en": "Pest Control", "hi": "कीट नियंत्रण", "kn": "ಕೀಟ ನಿಯಂತ್ರಣ"},
    {"id": "disease", "en": "Disease Management", "hi": "रोग प्रबंधन", "kn": "ರೋಗ ನಿರ್ವಹಣೆ"},
    {"id": "prevention", "en": "Prevention Tips", "hi": "रोकथाम सुझाव", "kn": "ತಡೆಗಟ್ಟುವಿಕೆ ಸಲಹೆಗಳು"},
    {"id": "general", "en": "Best Practices", "hi": "सर्वोत्तम अभ्यास", "kn": "ಅತ್ಯುತ್ತಮ ಅಭ್ಯಾಸಗಳು"},
    {"id": "seasonal", "en": "Seasonal Care", "hi": "मौसमी देखभाल", "kn": "ಋತುಮಾನದ ಆರೈಕೆ"},
]

CROP_TYPES = [
    {"id": "tomato", "emoji": "🍅", "en": "Tomato", "hi": "टमाटर", "kn": "ಟೊಮೆಟೊ"},
    {"id": "potato", "emoji": "🥔", "en": "Potato", "hi": "आलू", "kn": "ಆಲೂಗಡ್ಡೆ"},
    {"id": "rice", "emoji": "🌾", "en": "Rice/Paddy", "hi": "धान", "kn": "ಭತ್ತ"},
    {"id": "chili", "emoji": "🌶️", "en": "Chili", "hi": "मिर्च", "kn": "ಮೆಣಸಿನಕಾಯಿ"},
    {"id": "cotton", "emoji": "🏵️", "en": "Cotton", "hi": "कपास", "kn": "ಹತ್ತಿ"},
    {"id": "mango", "emoji": "🥭", "en": "Mango", "hi": "आम", "kn": "ಮಾವು"},
    {"id": "banana", "emoji": "🍌", "en": "Banana", "hi": "केला", "kn": "ಬಾಳೆಹಣ್ಣು"},
    {"id": "wheat", "emoji": "🌾", "en": "Wheat", "hi": "गेहूं", "kn": "ಗೋಧಿ"},
    {"id": "sugarcane", "emoji": "🎋", "en": "Sugarcane", "hi": "गन्ना", "kn": "ಕಬ್ಬು"},
]

REGIONS = [
    {"id": "karnataka", "en": "Karnataka", "hi": "कर्नाटक", "kn": "ಕರ್ನಾಟಕ"},
    {"id": "maharashtra", "en": "Maharashtra", "hi": "महाराष्ट्र", "kn": "ಮಹಾರಾಷ್ಟ್ರ"},
    {"id": "andhra", "en": "Andhra Pradesh", "hi": "आंध्र प्रदेश", "kn": "ಆಂಧ್ರ ಪ್ರದೇಶ"},
    {"id": "tamil", "en": "Tamil Nadu", "hi": "तमिलनाडु", "kn": "ತಮಿಳುನಾಡು"},
    {"id": "punjab", "en": "Punjab", "hi": "पंजाब", "kn": "ಪಂಜಾಬ್"},
    {"id": "up", "en": "Uttar Pradesh", "hi": "उत्तर प्रदेश", "kn": "ಉತ್ತರ ಪ್ರದೇಶ"},
    {"id": "gujarat", "en": "Gujarat", "hi": "गुजरात", "kn": "ಗುಜರಾತ್"},
    {"id": "mp", "en": "Madhya Pradesh", "hi": "मध्य प्रदेश", "kn": "ಮಧ್ಯ ಪ್ರದೇಶ"},
    {"id": "rajasthan", "en": "Rajasthan", "hi": "राजस्थान", "kn": "ರಾಜಸ್ಥಾನ"},
    {"id": "kerala", "en": "Kerala", "hi": "केरल", "kn": "ಕೇರಳ"},
]

SEASONS = [
    {"id": "kharif", "en": "Kharif (Monsoon)", "hi": "खरीफ (मानसून)", "kn": "ಖಾರಿಫ್ (ಮುಂಗಾರು)"},
    {"id": "rabi", "en": "Rabi (Winter)", "hi": "रबी (सर्दी)", "kn": "ರಬಿ (ಚಳಿಗಾಲ)"},
    {"id": "zaid", "en": "Zaid (Summer)", "hi": "जायद (गर्मी)", "kn": "ಜೈದ್ (ಬೇಸಿಗೆ)"},
]

LANGUAGES = [
    {"id": "en", "label": "English"},
    {"id": "hi", "label": "हिन्दी"},
    {"id": "kn", "label": "ಕನ್ನಡ"},
]


def current_season(month: Optional[int] = None) -> str:
    """Indian cropping season for a month (1-12); defaults to this month."""
    if month is None:
        month = date.today().month
    if 6 <= month <= 10:
        return "kharif"
    if month >= 11 or month <= 2:
        return "rabi"
    return "zaid"


def catalog_label(catalog: list[dict], item_id: str, language: str) -> str:
    """Localized label of a catalog entry, or the id itself if unknown."""
    for item in catalog:
        if item["id"] == item_id:
            return item.get(language) or item["en"]
    return item_id


# -----------------------------------------------------------------------------
# Messages
# -----------------------------------------------------------------------------

MESSAGES = {
    # Notices
    "connection_required": {
        "en": "Connection Required",
        "hi": "कनेक्शन आवश्यक",
        "kn": "ಸಂಪರ್ಕ ಅಗತ್ಯ",
    },
    "internet_needed_for_lesson": {
        "en": "Internet required to generate new lesson",
        "hi": "नया पाठ बनाने के लिए इंटरनेट चाहिए",
        "kn": "ಹೊಸ ಪಾಠ ರಚಿಸಲು ಇಂಟರ್ನೆಟ್ ಬೇಕು",
    },
    "internet_needed": {
        "en": "Internet connection required",
        "hi": "इंटरनेट कनेक्शन आवश्यक है",
        "kn": "ಇಂಟರ್ನೆಟ್ ಸಂಪರ್ಕ ಅಗತ್ಯವಿದೆ",
    },
    "new_lesson_ready": {
        "en": "✨ New Lesson Ready!",
        "hi": "✨ नया पाठ तैयार!",
        "kn": "✨ ಹೊಸ ಪಾಠ ಸಿದ್ಧ!",
    },
    "error": {
        "en": "Error",
        "hi": "त्रुटि",
        "kn": "ದೋಷ",
    },
    "lesson_failed": {
        "en": "Failed to generate lesson",
        "hi": "पाठ बनाने में विफल",
        "kn": "ಪಾಠ ರಚಿಸಲು ವಿಫಲವಾಗಿದೆ",
    },
    "quiz_failed": {
        "en": "Failed to generate quiz",
        "hi": "क्विज़ बनाने में विफल",
        "kn": "ಕ್ವಿಜ್ ರಚಿಸಲು ವಿಫಲವಾಗಿದೆ",
    },
    "answer_failed": {
        "en": "Could not get an answer. Please try again.",
        "hi": "उत्तर नहीं मिल सका। कृपया पुनः प्रयास करें।",
        "kn": "ಉತ್ತರ ಪಡೆಯಲು ಸಾಧ್ಯವಾಗಲಿಲ್ಲ. ದಯವಿಟ್ಟು ಮತ್ತೆ ಪ್ರಯತ್ನಿಸಿ.",
    },
    "rate_limited": {
        "en": "Too many requests. Please wait and try again.",
        "hi": "बहुत अधिक अनुरोध। कृपया प्रतीक्षा करें और पुनः प्रयास करें।",
        "kn": "ಹಲವಾರು ವಿನಂತಿಗಳು. ದಯವಿಟ್ಟು ಕಾಯಿರಿ ಮತ್ತು ಮತ್ತೆ ಪ್ರಯತ್ನಿಸಿ.",
    },
    "credits_exhausted": {
        "en": "AI service limit reached. Please try again later.",
        "hi": "AI सेवा सीमा समाप्त। कृपया बाद में प्रयास करें।",
        "kn": "AI ಸೇವೆಯ ಮಿತಿ ತಲುಪಿದೆ. ದಯವಿಟ್ಟು ನಂತರ ಪ್ರಯತ್ನಿಸಿ.",
    },
    "saved": {
        "en": "📥 Saved",
        "hi": "📥 सहेजा गया",
        "kn": "📥 ಉಳಿಸಲಾಗಿದೆ",
    },
    "saved_for_later": {
        "en": "Saved for later viewing",
        "hi": "बाद में देखने के लिए सहेजा गया",
        "kn": "ನಂತರ ವೀಕ್ಷಣೆಗಾಗಿ ಉಳಿಸಲಾಗಿದೆ",
    },
    "save_failed": {
        "en": "Could not save lesson on this device",
        "hi": "इस डिवाइस पर पाठ सहेजा नहीं जा सका",
        "kn": "ಈ ಸಾಧನದಲ್ಲಿ ಪಾಠವನ್ನು ಉಳಿಸಲಾಗಲಿಲ್ಲ",
    },
    "lesson_complete": {
        "en": "🎉 Lesson Complete!",
        "hi": "🎉 पाठ पूरा!",
        "kn": "🎉 ಪಾಠ ಪೂರ್ಣ!",
    },
    "quiz_complete": {
        "en": "Quiz Complete!",
        "hi": "क्विज़ पूरा!",
        "kn": "ಕ್ವಿಜ್ ಪೂರ್ಣ!",
    },
    # Labels
    "app_title": {
        "en": "🎓 AI Education Hub",
        "hi": "🎓 AI शिक्षा केंद्र",
        "kn": "🎓 AI ಶಿಕ್ಷಣ ಕೇಂದ್ರ",
    },
    "app_subtitle": {
        "en": "Personalized lessons for your crop, region, and season",
        "hi": "आपकी फसल, आपके क्षेत्र और मौसम के अनुसार व्यक्तिगत पाठ",
        "kn": "ನಿಮ್ಮ ಬೆಳೆ, ಪ್ರದೇಶ ಮತ್ತು ಋತುವಿಗೆ ಅನುಗುಣವಾದ ವೈಯಕ್ತಿಕ ಪಾಠಗಳು",
    },
    "saved_count": {
        "en": "saved",
        "hi": "सहेजे गए",
        "kn": "ಉಳಿಸಲಾಗಿದೆ",
    },
    "online": {
        "en": "🟢 Online",
        "hi": "🟢 ऑनलाइन",
        "kn": "🟢 ಆನ್‌ಲೈನ್",
    },
    "offline": {
        "en": "🔴 Offline",
        "hi": "🔴 ऑफ़लाइन",
        "kn": "🔴 ಆಫ್‌ಲೈನ್",
    },
    "pending_sync": {
        "en": "pending sync",
        "hi": "सिंक बाकी",
        "kn": "ಸಿಂಕ್ ಬಾಕಿ",
    },
    "preferences": {
        "en": "🎯 Your Preferences",
        "hi": "🎯 आपकी पसंद",
        "kn": "🎯 ನಿಮ್ಮ ಆಯ್ಕೆ",
    },
    "crop": {"en": "🌱 Crop", "hi": "🌱 फसल", "kn": "🌱 ಬೆಳೆ"},
    "region": {"en": "📍 Region", "hi": "📍 क्षेत्र", "kn": "📍 ಪ್ರದೇಶ"},
    "season": {"en": "🌦️ Season", "hi": "🌦️ मौसम", "kn": "🌦️ ಋತು"},
    "lesson_type": {"en": "Lesson type", "hi": "पाठ प्रकार", "kn": "ಪಾಠದ ಪ್ರಕಾರ"},
    "language": {"en": "Language", "hi": "भाषा", "kn": "ಭಾಷೆ"},
    "tab_lessons": {"en": "📖 Lessons", "hi": "📖 पाठ", "kn": "📖 ಪಾಠಗಳು"},
    "tab_quiz": {"en": "🧠 Quiz", "hi": "🧠 क्विज़", "kn": "🧠 ಕ್ವಿಜ್"},
    "tab_qa": {"en": "🎤 Ask", "hi": "🎤 पूछें", "kn": "🎤 ಕೇಳಿ"},
    "tab_chat": {"en": "💬 Chat", "hi": "💬 चैट", "kn": "💬 ಚಾಟ್"},
    "generate_lesson": {
        "en": "✨ Generate Lesson",
        "hi": "✨ पाठ बनाएं",
        "kn": "✨ ಪಾಠ ರಚಿಸಿ",
    },
    "generating": {
        "en": "Creating your lesson...",
        "hi": "आपका पाठ बन रहा है...",
        "kn": "ನಿಮ್ಮ ಪಾಠ ರಚಿಸಲಾಗುತ್ತಿದೆ...",
    },
    "no_lessons": {
        "en": "No lessons yet. Generate your first lesson!",
        "hi": "अभी कोई पाठ नहीं। अपना पहला पाठ बनाएं!",
        "kn": "ಇನ್ನೂ ಯಾವುದೇ ಪಾಠಗಳಿಲ್ಲ. ನಿಮ್ಮ ಮೊದಲ ಪಾಠವನ್ನು ರಚಿಸಿ!",
    },
    "play": {"en": "▶️ Play", "hi": "▶️ चलाएं", "kn": "▶️ ಪ್ಲೇ"},
    "pause": {"en": "⏸️ Pause", "hi": "⏸️ रोकें", "kn": "⏸️ ವಿರಾಮ"},
    "previous": {"en": "⬅️ Previous", "hi": "⬅️ पिछला", "kn": "⬅️ ಹಿಂದಿನ"},
    "next": {"en": "Next ➡️", "hi": "अगला ➡️", "kn": "ಮುಂದಿನ ➡️"},
    "close": {"en": "✖️ Close", "hi": "✖️ बंद करें", "kn": "✖️ ಮುಚ್ಚಿ"},
    "listen": {"en": "🔊 Listen", "hi": "🔊 सुनें", "kn": "🔊 ಆಲಿಸಿ"},
    "stop_listening": {"en": "🔇 Stop", "hi": "🔇 बंद करें", "kn": "🔇 ನಿಲ್ಲಿಸಿ"},
    "save_offline": {"en": "📥 Save", "hi": "📥 सहेजें", "kn": "📥 ಉಳಿಸಿ"},
    "offline_ready": {"en": "✅ Offline", "hi": "✅ ऑफ़लाइन", "kn": "✅ ಆಫ್‌ಲೈನ್"},
    "key_points": {
        "en": "📌 Key Points",
        "hi": "📌 मुख्य बिंदु",
        "kn": "📌 ಪ್ರಮುಖ ಅಂಶಗಳು",
    },
    "practical_tip": {
        "en": "💡 Practical Tip",
        "hi": "💡 व्यावहारिक सुझाव",
        "kn": "💡 ಪ್ರಾಯೋಗಿಕ ಸಲಹೆ",
    },
    "slide_of": {"en": "Slide", "hi": "स्लाइड", "kn": "ಸ್ಲೈಡ್"},
    "start_quiz": {
        "en": "🧠 Start Quiz",
        "hi": "🧠 क्विज़ शुरू करें",
        "kn": "🧠 ಕ್ವಿಜ್ ಪ್ರಾರಂಭಿಸಿ",
    },
    "check_answer": {
        "en": "Check Answer",
        "hi": "उत्तर जांचें",
        "kn": "ಉತ್ತರ ಪರಿಶೀಲಿಸಿ",
    },
    "next_question": {
        "en": "Next Question",
        "hi": "अगला प्रश्न",
        "kn": "ಮುಂದಿನ ಪ್ರಶ್ನೆ",
    },
    "see_results": {
        "en": "See Results",
        "hi": "परिणाम देखें",
        "kn": "ಫಲಿತಾಂಶ ನೋಡಿ",
    },
    "correct": {"en": "✅ Correct!", "hi": "✅ सही!", "kn": "✅ ಸರಿ!"},
    "incorrect": {"en": "❌ Not quite", "hi": "❌ गलत", "kn": "❌ ತಪ್ಪು"},
    "your_score": {"en": "Your score", "hi": "आपका स्कोर", "kn": "ನಿಮ್ಮ ಅಂಕ"},
    "try_again": {
        "en": "🔄 Try Again",
        "hi": "🔄 फिर से प्रयास करें",
        "kn": "🔄 ಮತ್ತೆ ಪ್ರಯತ್ನಿಸಿ",
    },
    "ask_placeholder": {
        "en": "Ask any farming question...",
        "hi": "खेती से जुड़ा कोई भी सवाल पूछें...",
        "kn": "ಯಾವುದೇ ಕೃಷಿ ಪ್ರಶ್ನೆ ಕೇಳಿ...",
    },
    "ask": {"en": "Ask", "hi": "पूछें", "kn": "ಕೇಳಿ"},
    "speak_question": {
        "en": "🎤 Speak your question",
        "hi": "🎤 अपना प्रश्न बोलें",
        "kn": "🎤 ನಿಮ್ಮ ಪ್ರಶ್ನೆಯನ್ನು ಹೇಳಿ",
    },
    "not_heard": {
        "en": "Could not understand the recording. Please try again.",
        "hi": "रिकॉर्डिंग समझ नहीं आई। कृपया पुनः प्रयास करें।",
        "kn": "ರೆಕಾರ್ಡಿಂಗ್ ಅರ್ಥವಾಗಲಿಲ್ಲ. ದಯವಿಟ್ಟು ಮತ್ತೆ ಪ್ರಯತ್ನಿಸಿ.",
    },
    "follow_ups": {
        "en": "You may also ask",
        "hi": "आप यह भी पूछ सकते हैं",
        "kn": "ನೀವು ಇದನ್ನೂ ಕೇಳಬಹುದು",
    },
    "chat_placeholder": {
        "en": "Type your message...",
        "hi": "अपना संदेश लिखें...",
        "kn": "ನಿಮ್ಮ ಸಂದೇಶವನ್ನು ಟೈಪ್ ಮಾಡಿ...",
    },
}


def t(key: str, language: str) -> str:
    """Return the message for `key` in `language`, falling back to English."""
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    return entry.get(language) or entry["en"]

"""Localization and locale-related constants."""

# Weekday codes as stored in the doctor_schedules table, indexed by datetime.weekday()
DAY_CODES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Arabic weekday labels keyed by schedule day code
ARABIC_DAY_NAMES = {
    "Sat": "السبت",
    "Sun": "الأحد",
    "Mon": "الاثنين",
    "Tue": "الثلاثاء",
    "Wed": "الأربعاء",
    "Thu": "الخميس",
    "Fri": "الجمعة",
}

# Arabic month names, index 0 is January
ARABIC_MONTHS = (
    "يناير",
    "فبراير",
    "مارس",
    "أبريل",
    "مايو",
    "يونيو",
    "يوليو",
    "أغسطس",
    "سبتمبر",
    "أكتوبر",
    "نوفمبر",
    "ديسمبر",
)

# Display messages for step validation failures
VALIDATION_MESSAGES = {
    "missing_specialty": "يرجى اختيار التخصص أولاً",
    "missing_doctor": "يرجى اختيار طبيب من التخصص المحدد",
    "missing_slot": "يرجى اختيار اليوم والوقت المناسبين",
    "missing_name": "يرجى إدخال الاسم",
    "bad_phone": "يرجى إدخال رقم هاتف صحيح (10-15 رقم)",
    "bad_email": "يرجى إدخال بريد إلكتروني صحيح",
    "stale_slot": "هذا الموعد لم يعد متاحاً، يرجى اختيار موعد آخر",
}

# Availability panel messages
AVAILABILITY_MESSAGES = {
    "no_doctor": "يرجى اختيار طبيب أولاً",
    "empty": "لا توجد مواعيد متاحة لهذا الطبيب",
    "failed": "حدث خطأ أثناء جلب المواعيد المتاحة",
}

# Warning shown when the WhatsApp hand-off succeeded but the booking was not saved
PERSISTENCE_DEGRADED_MESSAGE = "تم إرسال طلبك عبر واتساب، لكن تعذر حفظه في نظام الحجز"

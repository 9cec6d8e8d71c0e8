"""Message templates for the WhatsApp hand-off, separate from the launch transport."""

from typing import Optional


class BookingMessageTemplates:
    """Static templates for the pre-filled booking request message."""

    @staticmethod
    def booking_request(
        clinic_name: str,
        clinic_phone: str,
        doctor_name: str,
        specialty_name: Optional[str] = None,
        date: Optional[str] = None,
        time: Optional[str] = None,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Template for a booking request sent to the clinic over WhatsApp."""
        message = f"🏥 *{clinic_name} - طلب حجز موعد* 🏥\n\n"

        message += "👨‍⚕️ *معلومات الطبيب:*\n"
        message += f"- الطبيب: {doctor_name}\n"
        if specialty_name:
            message += f"- التخصص: {specialty_name}\n"
        message += "\n"

        if date or time:
            message += "🗓️ *تفاصيل الموعد:*\n"
            if date and time:
                message += f"- التاريخ والوقت: {date} - {time}\n"
            elif date:
                message += f"- التاريخ: {date}\n"
            else:
                message += f"- الوقت: {time}\n"
            message += "\n"

        message += "👤 *معلومات المريض:*\n"
        if name:
            message += f"- الاسم: {name}\n"
        if phone:
            message += f"- رقم الهاتف: {phone}\n"
        if email:
            message += f"- البريد الإلكتروني: {email}\n"
        message += "\n"

        if notes:
            message += f"📝 *ملاحظات:*\n{notes}\n\n"

        message += "------------------\n"
        message += f"✨ نتطلع لزيارتكم! للاستفسار يرجى الاتصال على {clinic_phone} ✨"
        return message

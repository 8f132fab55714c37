"""Purchase inquiry form."""

from typing import Any

from ..models import FormDefinition, FormField

FORM_TYPE = "purchase_inquiry"
# Transition target (or typed input) that opens the form
START_TOKEN = "form_purchase_inquiry"

SHOP_URL = "www.example.com/shop"
CS_WHATSAPP = "+62 812-3456-7890"
PARTNERSHIP_WHATSAPP = "+62 811-9876-5432"
PARTNERSHIP_EMAIL = "partnership@example.com"

BUYER_TYPES = ("perusahaan", "individu")
GENDERS = ("L", "P")
PURPOSES = {
    "1": "end_user",
    "2": "qty_banyak",
    "3": "online",
    "4": "kerjasama_bisnis",
}


def _one_of(choices):
    allowed = {c.lower() for c in choices}
    return lambda value: value.strip().lower() in allowed


def _min_length(length: int):
    return lambda value: len(value.strip()) >= length


def _age(value: str) -> bool:
    try:
        age = int(value.strip())
    except ValueError:
        return False
    return 17 <= age <= 100


FIELDS = (
    FormField(
        name="tipePembeli",
        prompt=(
            "Kamu beli sebagai apa nih?\n\nKetik:\n"
            "• *Perusahaan* - Untuk pembelian perusahaan\n"
            "• *Individu* - Untuk pembelian pribadi"
        ),
        validator=_one_of(BUYER_TYPES),
        error_text="Pilih *Perusahaan* atau *Individu* ya! 😊",
        normalizer=lambda value: value.strip().lower(),
    ),
    FormField(
        name="nama",
        prompt="Boleh tau nama lengkap kamu? 😊",
        validator=_min_length(3),
        error_text="Nama minimal 3 huruf ya!",
    ),
    FormField(
        name="umur",
        prompt="Umur kamu berapa? (angka aja ya)",
        validator=_age,
        error_text="Umur harus angka antara 17-100 tahun ya!",
        normalizer=lambda value: int(value.strip()),
    ),
    FormField(
        name="jenisKelamin",
        prompt="Jenis kelamin?\n\nKetik:\n• *L* - Laki-laki\n• *P* - Perempuan",
        validator=_one_of(GENDERS),
        error_text="Ketik *L* atau *P* ya! 😊",
        normalizer=lambda value: value.strip().upper(),
    ),
    FormField(
        name="kota",
        prompt="Kamu ada di kota mana?",
        validator=_min_length(3),
        error_text="Nama kota minimal 3 huruf ya!",
    ),
    FormField(
        name="tujuanPembelian",
        prompt=(
            "Tujuan pembeliannya apa nih?\n\nKetik angka:\n"
            "1️⃣ - Buat dipakai sendiri (end user)\n"
            "2️⃣ - Beli dalam jumlah banyak\n"
            "3️⃣ - Beli online\n"
            "4️⃣ - Kerjasama bisnis"
        ),
        validator=lambda value: value.strip() in PURPOSES,
        error_text="Ketik angka 1-4 ya! 😊",
        normalizer=lambda value: PURPOSES[value.strip()],
    ),
)


def build_completion(data: dict[str, Any]) -> str:
    """Route the customer to the right channel based on their answers."""
    purpose = data.get("tujuanPembelian")
    buyer_type = data.get("tipePembeli")
    city = data.get("kota")

    lines = [
        f"Terima kasih {data.get('nama')}! 🙏",
        "",
        "Data kamu udah aku catat:",
        f"• Tipe: {buyer_type}",
        f"• Umur: {data.get('umur')} tahun",
        f"• Kota: {city}",
        "",
    ]

    if purpose == "online":
        lines += [
            "Untuk pembelian online, kamu bisa langsung ke:",
            f"🛒 Web: {SHOP_URL}",
            "",
            "Atau hubungi CS kami:",
            f"📞 WhatsApp: {CS_WHATSAPP}",
        ]
    elif purpose == "kerjasama_bisnis":
        lines += [
            "Untuk kerjasama bisnis, silakan hubungi:",
            f"📞 WhatsApp: {PARTNERSHIP_WHATSAPP}",
            f"📧 Email: {PARTNERSHIP_EMAIL}",
            "",
            "Tim kita akan senang diskusi sama kamu! 🤝",
        ]
    elif purpose == "end_user" and buyer_type == "individu":
        lines += [
            "Untuk kebutuhan pribadi, hubungi reseller terdekat:",
            f"📞 WhatsApp: {CS_WHATSAPP}",
            "",
            f"Sebutkan kota kamu ({city}) buat diarahkan ke reseller setempat ya! 😊",
        ]
    elif purpose == "qty_banyak":
        lines += [
            "Untuk pembelian dalam jumlah banyak, hubungi distributor:",
            f"📞 WhatsApp: {CS_WHATSAPP}",
            "",
            f"Sebutkan kota kamu ({city}) buat info harga grosir! 💼",
        ]
    else:
        lines += [
            "Silakan hubungi CS kami untuk info lebih lanjut:",
            f"📞 WhatsApp: {CS_WHATSAPP}",
        ]

    lines += ["", "Terima kasih! Ketik *menu* kalau butuh info lainnya 😊"]
    return "\n".join(lines)


PURCHASE_INQUIRY_FORM = FormDefinition(
    form_type=FORM_TYPE,
    fields=FIELDS,
    build_completion=build_completion,
)

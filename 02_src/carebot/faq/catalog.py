"""Product FAQ catalog."""

from ..models import FAQEntryPoint, FAQQuestion, Product

NO_INFO = "Oops belum ada info yang valid!"

SILVERSTREAM_FAQS = [
    FAQQuestion(
        id="faq_ss_manfaat",
        question="Apa manfaat utama?",
        answer=(
            "Menghancurkan biofilm untuk mendukung pembersihan luka yang efektif.\n"
            "Mempercepat penyembuhan dan mendukung pencegahan infeksi.\n"
            "Lembut pada luka dengan pH alami.\n"
            "Tidak beracun dan tidak menyebabkan iritasi.\n"
            "Tidak mengandung Steroid atau Antibiotik.\n"
            "Tidak mengandung Alkohol atau Iodin.\n"
            "Tidak merusak jaringan sehat.\n"
            "Ramah lingkungan - tidak memerlukan pembuangan khusus."
        ),
    ),
    FAQQuestion(
        id="faq_ss_komposisi",
        question="Apa kandungannya?",
        answer=(
            "-Water for Injection (air steril)\n"
            "-Gliserol\n"
            "-Tween-20 (surfaktan)\n"
            "-TRIS Buffer (penyeimbang pH)\n"
            "-Menthol\n"
            "-Silver Nitrate 0,01% → menghasilkan ion perak"
        ),
    ),
    FAQQuestion(
        id="faq_ss_penyimpanan",
        question="Cara simpan yang benar?",
        answer=(
            "-Simpan pada suhu ruangan 10°C - 30°C\n"
            "-Letakkan di tempat kering, jauh dari kelembaban\n"
            "-Hindarkan dari sinar matahari langsung\n"
            "-Tutup rapat setelah digunakan\n"
            "-Jika botol sudah kontak langsung dengan luka, buang setelah pemakaian"
        ),
    ),
    FAQQuestion(id="faq_ss_durasi_efek", question="Berapa lama efeknya?", answer=NO_INFO),
    FAQQuestion(
        id="faq_ss_diabetes",
        question="Aman utk luka diabetes?",
        answer=(
            "SilverStream umumnya aman digunakan pada penderita diabetes karena "
            "diformulasikan untuk luka kronis termasuk luka diabetes\n"
            " -Mengandung ion perak yang membantu kontrol infeksi & mendukung penyembuhan\n"
            "Namun, penggunaan untuk luka diabetes sebaiknya didampingi tenaga medis "
            "karena luka diabetes berisiko infeksi & sirkulasi buruk\n"
            " -Cocok sebagai bagian dari perawatan luka, bukan satu-satunya terapi\n\n"
            "Ringkasnya:\n"
            " Aman, tapi harus dalam pengawasan medis bila luka diabetes sedang atau berat"
        ),
    ),
    FAQQuestion(id="faq_ss_anak", question="Bisa untuk anak-anak?", answer=NO_INFO),
    FAQQuestion(
        id="faq_ss_kemasan",
        question="Ukuran kemasan apa saja?",
        answer="Tersedia dalam ukuran 100 mL, 250 mL, 500 mL",
    ),
    FAQQuestion(
        id="faq_ss_resep",
        question="Perlu resep dokter?",
        answer="Tidak perlu resep dokter",
    ),
    FAQQuestion(id="faq_ss_expired", question="Berapa lama expired?", answer=NO_INFO),
    FAQQuestion(
        id="faq_ss_efek_samping",
        question="Ada efek samping?",
        answer=(
            "Efek samping SilverStream:\n"
            "-Iritasi ringan pada kulit atau rasa perih sesaat saat aplikasi\n"
            "-Sensasi dingin karena kandungan menthol (umumnya bukan masalah)\n"
            "-Pada sebagian kecil orang bisa muncul reaksi alergi seperti merah, "
            "gatal, atau bengkak\n"
            "-Jika digunakan tidak higienis, risiko kontaminasi botol bisa "
            "menyebabkan infeksi\n\n"
            "Catatan:\n"
            "Jika luka memburuk, muncul nanah berlebih, atau nyeri meningkat, "
            "hentikan penggunaan & konsultasikan tenaga medis"
        ),
    ),
    FAQQuestion(
        id="faq_ss_interaksi_obat", question="Bisa dengan obat lain?", answer=NO_INFO
    ),
]

STIMEL_FAQS = [
    FAQQuestion(
        id="faq_st_manfaat",
        question="Apa manfaat terapi?",
        answer="Meningkatkan kekuatan otot dan memperbaiki fungsi motorik.",
    ),
    FAQQuestion(
        id="faq_st_durasi_sesi",
        question="Berapa lama per sesi?",
        answer="30-45 menit per sesi.",
    ),
    FAQQuestion(
        id="faq_st_kontraindikasi",
        question="Ada kontraindikasi?",
        answer="Tidak dianjurkan untuk pengguna pacemaker dan ibu hamil.",
    ),
    FAQQuestion(id="faq_st_harga", question="Berapa biaya terapi?", answer=NO_INFO),
    FAQQuestion(id="faq_st_sakit", question="Apakah terasa sakit?", answer=NO_INFO),
    FAQQuestion(id="faq_st_frekuensi", question="Berapa kali seminggu?", answer=NO_INFO),
    FAQQuestion(id="faq_st_hasil", question="Kapan hasil terlihat?", answer=NO_INFO),
    FAQQuestion(id="faq_st_lansia", question="Bisa untuk lansia?", answer=NO_INFO),
    FAQQuestion(id="faq_st_perbedaan", question="Beda NMES & biofeedback?", answer=NO_INFO),
    FAQQuestion(id="faq_st_tenaga_medis", question="Perlu tenaga medis?", answer=NO_INFO),
    FAQQuestion(id="faq_st_rawat_jalan", question="Bisa rawat jalan?", answer=NO_INFO),
    FAQQuestion(id="faq_st_asuransi", question="Cover asuransi?", answer=NO_INFO),
]

AKUSEHAT_FAQS = [
    FAQQuestion(id="faq_as_akurasi", question="Seberapa akurat AI?", answer=NO_INFO),
    FAQQuestion(id="faq_as_privasi", question="Apakah data aman?", answer=NO_INFO),
    FAQQuestion(id="faq_as_offline", question="Bisa offline?", answer=NO_INFO),
    FAQQuestion(id="faq_as_durasi_scan", question="Berapa lama scan?", answer="3-5 menit"),
    FAQQuestion(
        id="faq_as_umur",
        question="Batasan umur?",
        answer="Tidak ada batasan umur untuk menggunakan AkuSehat",
    ),
    FAQQuestion(
        id="faq_as_device",
        question="Device apa saja?",
        answer="Saat ini kami masih tersedia untuk Android saja",
    ),
    FAQQuestion(id="faq_as_dokter", question="Bisa kirim ke dokter?", answer=NO_INFO),
    FAQQuestion(id="faq_as_biaya", question="Berapa biayanya?", answer=NO_INFO),
    FAQQuestion(id="faq_as_validasi", question="Tervalidasi medis?", answer=NO_INFO),
    FAQQuestion(id="faq_as_riwayat", question="Bisa simpan riwayat?", answer=NO_INFO),
]

CATALOG: dict[str, list[FAQQuestion]] = {
    Product.SILVERSTREAM.value: SILVERSTREAM_FAQS,
    Product.STIMEL.value: STIMEL_FAQS,
    Product.AKUSEHAT.value: AKUSEHAT_FAQS,
}

# States whose message is a generated FAQ list instead of a static payload.
FAQ_ENTRY_STATES: dict[str, FAQEntryPoint] = {
    "silverstream_faq": FAQEntryPoint(
        product=Product.SILVERSTREAM.value,
        intro="Pertanyaan seputar *SilverStream* 💧\n\nPilih pertanyaan yang ingin kamu tanyakan:",
    ),
    "stimel_faq": FAQEntryPoint(
        product=Product.STIMEL.value,
        intro="Pertanyaan seputar *Stimel* ⚡\n\nPilih pertanyaan yang ingin kamu tanyakan:",
    ),
    "akusehat_faq": FAQEntryPoint(
        product=Product.AKUSEHAT.value,
        intro="Pertanyaan seputar *AkuSehat* 📱\n\nPilih pertanyaan yang ingin kamu tanyakan:",
    ),
}

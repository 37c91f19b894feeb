"""
Banner Watermarker v1.2 - Translations Module
=============================================
UI text strings in multiple languages
"""

TRANSLATIONS = {
    "en": {
        "title": "🏷️ Banner Watermarker",
        "subtitle": "Synchronized banner watermark for a whole batch of images",

        # Sidebar
        "sb_config": "🛠 Settings",
        "btn_defaults": "↺ Reset settings",
        "lang_select": "Interface Language / Мова інтерфейсу",

        # Presets
        "sec_presets": "💾 Presets",
        "lbl_load_preset": "Load preset (.json)",
        "btn_save_preset": "⬇️ Save preset",
        "btn_remember": "📌 Remember as default",
        "msg_preset_saved": "✅ Settings remembered",

        # Banner
        "sec_banner": "1️⃣ Watermark banner",
        "lbl_text_input": "Watermark text",
        "lbl_font": "Font",
        "lbl_bg_color": "Banner color",
        "lbl_text_color": "Text color",
        "lbl_banner_h": "Banner height (%)",
        "lbl_banner_w": "Banner width (%)",
        "lbl_font_mult": "Text size (% of banner)",
        "lbl_offset_x": "Offset from right (px)",
        "lbl_offset_y": "Offset from bottom (px)",

        # Logo
        "sec_logo": "2️⃣ Logo",
        "lbl_logo_up": "Upload logo",
        "chk_show_logo": "Show logo",
        "lbl_logo_size": "Logo size (px)",
        "lbl_logo_pos": "Logo position",
        "lbl_logo_opacity": "Logo opacity",
        "lbl_logo_margin": "Logo margin (px)",

        # PDF
        "sec_pdf": "3️⃣ PDF layout",
        "lbl_per_page": "Images per page",
        "lbl_spacing": "Spacing between images (px)",
        "lbl_padding": "Padding around images (px)",
        "help_single": "Spacing and padding are ignored with one image per page",
        "chk_top_banner": "Header banner on every page",
        "lbl_top_banner_text": "Header text",
        "chk_join_button": "Call-to-action button",
        "lbl_join_text": "Button text",
        "lbl_link": "Link URL",

        # Workspace
        "files_header": "📂 Images",
        "uploader_label": "Drop images here",
        "btn_clear_workspace": "♻️ Start over",
        "msg_decoding": "⏳ Decoding images...",
        "msg_skipped": "⚠️ {} file(s) could not be read and were skipped",
        "nav_counter": "Image {} / {} ({})",
        "btn_prev": "◀ Previous",
        "btn_next": "Next ▶",

        # Editor
        "sec_edit": "✋ Adjust image",
        "btn_left": "←", "btn_right": "→", "btn_up": "↑", "btn_down": "↓",
        "btn_zoom_in": "🔍 +",
        "btn_zoom_out": "🔍 −",
        "btn_rot_left": "↺ -15°",
        "btn_rot_right": "↻ +15°",
        "btn_reset": "⟲ Reset",
        "stat_transform": "Zoom {:.0%} · Rotation {:.0f}°",

        # Export
        "sec_export": "⬇️ Export",
        "lbl_format": "Image format",
        "btn_dl_zip": "📦 Download all (ZIP)",
        "btn_dl_one": "🖼️ Download this image",
        "btn_build_pdf": "📄 Build PDF",
        "btn_dl_pdf": "⬇️ Download PDF",
        "error_pdf": "❌ PDF export unavailable: {}",
        "msg_pdf_ready": "✅ PDF ready: {} page(s)",
        "prev_placeholder": "Upload images to start",
    },

    "ua": {
        "title": "🏷️ Banner Watermarker",
        "subtitle": "Однакова вотермарка-банер для всієї пачки зображень",

        # Sidebar
        "sb_config": "🛠 Налаштування",
        "btn_defaults": "↺ Скинути налаштування",
        "lang_select": "Мова інтерфейсу / Interface Language",

        # Presets
        "sec_presets": "💾 Пресети",
        "lbl_load_preset": "Завантажити пресет (.json)",
        "btn_save_preset": "⬇️ Зберегти пресет",
        "btn_remember": "📌 Запам'ятати як типові",
        "msg_preset_saved": "✅ Налаштування збережено",

        # Banner
        "sec_banner": "1️⃣ Банер вотермарки",
        "lbl_text_input": "Текст вотермарки",
        "lbl_font": "Шрифт",
        "lbl_bg_color": "Колір банера",
        "lbl_text_color": "Колір тексту",
        "lbl_banner_h": "Висота банера (%)",
        "lbl_banner_w": "Ширина банера (%)",
        "lbl_font_mult": "Розмір тексту (% банера)",
        "lbl_offset_x": "Відступ справа (px)",
        "lbl_offset_y": "Відступ знизу (px)",

        # Logo
        "sec_logo": "2️⃣ Логотип",
        "lbl_logo_up": "Завантажити логотип",
        "chk_show_logo": "Показувати логотип",
        "lbl_logo_size": "Розмір логотипа (px)",
        "lbl_logo_pos": "Позиція логотипа",
        "lbl_logo_opacity": "Прозорість логотипа",
        "lbl_logo_margin": "Відступ логотипа (px)",

        # PDF
        "sec_pdf": "3️⃣ Макет PDF",
        "lbl_per_page": "Зображень на сторінку",
        "lbl_spacing": "Проміжок між зображеннями (px)",
        "lbl_padding": "Поля навколо зображень (px)",
        "help_single": "Для одного зображення на сторінку проміжки ігноруються",
        "chk_top_banner": "Заголовок на кожній сторінці",
        "lbl_top_banner_text": "Текст заголовка",
        "chk_join_button": "Кнопка-заклик",
        "lbl_join_text": "Текст кнопки",
        "lbl_link": "Посилання",

        # Workspace
        "files_header": "📂 Зображення",
        "uploader_label": "Перетягніть зображення сюди",
        "btn_clear_workspace": "♻️ Почати заново",
        "msg_decoding": "⏳ Декодування зображень...",
        "msg_skipped": "⚠️ {} файл(ів) не вдалося прочитати",
        "nav_counter": "Зображення {} / {} ({})",
        "btn_prev": "◀ Назад",
        "btn_next": "Далі ▶",

        # Editor
        "sec_edit": "✋ Налаштувати зображення",
        "btn_left": "←", "btn_right": "→", "btn_up": "↑", "btn_down": "↓",
        "btn_zoom_in": "🔍 +",
        "btn_zoom_out": "🔍 −",
        "btn_rot_left": "↺ -15°",
        "btn_rot_right": "↻ +15°",
        "btn_reset": "⟲ Скинути",
        "stat_transform": "Масштаб {:.0%} · Поворот {:.0f}°",

        # Export
        "sec_export": "⬇️ Експорт",
        "lbl_format": "Формат зображень",
        "btn_dl_zip": "📦 Скачати все (ZIP)",
        "btn_dl_one": "🖼️ Скачати це зображення",
        "btn_build_pdf": "📄 Створити PDF",
        "btn_dl_pdf": "⬇️ Скачати PDF",
        "error_pdf": "❌ Експорт PDF недоступний: {}",
        "msg_pdf_ready": "✅ PDF готовий: {} стор.",
        "prev_placeholder": "Завантажте зображення, щоб почати",
    },
}

"""
Banner Watermarker v1.2.0 - Main Application
============================================
Batch banner watermarking with single-image and PDF export
"""

import streamlit as st

import config
import export_pipeline
import watermarker_engine as engine
import translations as T_DATA
import utils
from errors import DependencyUnavailable
from logger import get_logger

logger = get_logger(__name__)

st.set_page_config(
    page_title=f"{config.APP_NAME} v{config.APP_VERSION}",
    page_icon="🏷️",
    layout="wide",
    initial_sidebar_state="expanded"
)

utils.inject_css()
utils.init_session_state()

lang_code = st.session_state['lang_code']
T = T_DATA.TRANSLATIONS[lang_code]

# === SIDEBAR ===
with st.sidebar:
    st.selectbox(T['lang_select'], list(T_DATA.TRANSLATIONS.keys()), key='lang_code')
    st.header(T['sb_config'])

    # Presets
    with st.expander(T['sec_presets'], expanded=False):
        uploaded_preset = st.file_uploader(T['lbl_load_preset'], type=['json'], key='preset_uploader')
        if uploaded_preset:
            if f"processed_{uploaded_preset.name}" not in st.session_state:
                success, error = utils.apply_settings_from_json(uploaded_preset)
                if success:
                    st.session_state[f"processed_{uploaded_preset.name}"] = True
                    st.rerun()
                else: st.error(error)

        st.download_button(T['btn_save_preset'], utils.get_current_settings_json(), file_name="preset.json", use_container_width=True)
        if st.button(T['btn_remember'], use_container_width=True):
            utils.remember_settings()
            st.success(T['msg_preset_saved'])

    # Banner
    with st.expander(T['sec_banner'], expanded=True):
        st.text_input(T['lbl_text_input'], max_chars=config.MAX_WATERMARK_TEXT_LENGTH, key='watermark_text_key')
        st.selectbox(T['lbl_font'], config.FONT_OPTIONS, key='font_family_key')
        c1, c2 = st.columns(2)
        with c1: st.color_picker(T['lbl_bg_color'], key='bg_color_key')
        with c2: st.color_picker(T['lbl_text_color'], key='text_color_key')
        st.slider(T['lbl_banner_h'], *config.BANNER_HEIGHT_RANGE, step=0.5, key='banner_height_percent_key')
        st.slider(T['lbl_banner_w'], *config.BANNER_WIDTH_RANGE, step=1.0, key='banner_width_percent_key')
        st.slider(T['lbl_font_mult'], *config.FONT_SIZE_MULTIPLIER_RANGE, step=0.05, key='font_size_multiplier_key')
        st.slider(T['lbl_offset_x'], 0, 100, step=5, key='offset_x_key')
        st.slider(T['lbl_offset_y'], 0, 100, step=5, key='offset_y_key')

    # Logo
    with st.expander(T['sec_logo']):
        logo_file = st.file_uploader(T['lbl_logo_up'], type=['png', 'jpg', 'jpeg', 'webp'], key='logo_uploader')
        if logo_file is not None:
            st.session_state['logo_bytes'] = logo_file.getvalue()
        st.checkbox(T['chk_show_logo'], key='show_logo_key')
        st.slider(T['lbl_logo_size'], *config.LOGO_SIZE_RANGE, key='logo_size_key')
        st.selectbox(T['lbl_logo_pos'], config.LOGO_POSITIONS, key='logo_position_key')
        st.slider(T['lbl_logo_opacity'], *config.LOGO_OPACITY_RANGE, step=0.05, key='logo_opacity_key')
        st.slider(T['lbl_logo_margin'], *config.LOGO_MARGIN_RANGE, key='logo_margin_key')

    # PDF layout
    with st.expander(T['sec_pdf']):
        st.selectbox(T['lbl_per_page'], list(range(config.IMAGES_PER_PAGE_RANGE[0], config.IMAGES_PER_PAGE_RANGE[1] + 1)), key='images_per_page_key')
        single = st.session_state['images_per_page_key'] == 1
        st.slider(T['lbl_spacing'], *config.SPACING_RANGE, key='image_spacing_key', disabled=single, help=T['help_single'])
        st.slider(T['lbl_padding'], *config.PADDING_RANGE, key='image_padding_key', disabled=single, help=T['help_single'])
        st.checkbox(T['chk_top_banner'], key='show_top_banner_key')
        st.text_input(T['lbl_top_banner_text'], key='top_banner_text_key')
        st.checkbox(T['chk_join_button'], key='show_join_button_key')
        st.text_input(T['lbl_join_text'], key='join_button_text_key')
        st.text_input(T['lbl_link'], key='link_url_key')

    if st.button(T['btn_defaults'], on_click=utils.reset_settings, use_container_width=True): st.rerun()

# === MAIN ===
st.title(T['title'])
st.caption(T['subtitle'])

batch = st.session_state['batch']
watermark, layout, decorations = utils.current_settings()

c_left, c_right = st.columns([1.8, 1], gap="large")

with c_left:
    st.subheader(T['files_header'])
    uploaded = st.file_uploader(T['uploader_label'], type=[e.lstrip('.') for e in config.SUPPORTED_INPUT_FORMATS],
                                accept_multiple_files=True, key=f"up_{st.session_state['uploader_key']}")
    if uploaded:
        with st.spinner(T['msg_decoding']):
            items, skipped = utils.process_uploaded_files(uploaded)
        if skipped:
            st.warning(T['msg_skipped'].format(skipped))
        utils.replace_batch(items)
        st.session_state['uploader_key'] += 1
        st.rerun()

    if len(batch) == 0:
        st.markdown(f'<div class="preview-placeholder">{T["prev_placeholder"]}</div>', unsafe_allow_html=True)
    else:
        idx = min(st.session_state['current_index'], len(batch) - 1)
        item = batch[idx]

        n1, n2, n3 = st.columns([1, 2, 1])
        with n1:
            if st.button(T['btn_prev'], disabled=idx == 0, use_container_width=True):
                st.session_state['current_index'] = idx - 1
                st.rerun()
        with n2:
            st.markdown(T['nav_counter'].format(idx + 1, len(batch), item.name))
        with n3:
            if st.button(T['btn_next'], disabled=idx == len(batch) - 1, use_container_width=True):
                st.session_state['current_index'] = idx + 1
                st.rerun()

        st.image(utils.get_preview(item), caption=item.name, use_container_width=True)

with c_right:
    if len(batch) > 0:
        item = batch[min(st.session_state['current_index'], len(batch) - 1)]
        store = batch.transforms

        # Adjust
        st.subheader(T['sec_edit'])
        step = config.PAN_STEP
        m1, m2, m3, m4 = st.columns(4)
        if m1.button(T['btn_left'], use_container_width=True): store.move(item.id, -step, 0); st.rerun()
        if m2.button(T['btn_right'], use_container_width=True): store.move(item.id, step, 0); st.rerun()
        if m3.button(T['btn_up'], use_container_width=True): store.move(item.id, 0, -step); st.rerun()
        if m4.button(T['btn_down'], use_container_width=True): store.move(item.id, 0, step); st.rerun()

        z1, z2, r1, r2 = st.columns(4)
        if z1.button(T['btn_zoom_in'], use_container_width=True): store.zoom(item.id, config.ZOOM_STEP); st.rerun()
        if z2.button(T['btn_zoom_out'], use_container_width=True): store.zoom(item.id, -config.ZOOM_STEP); st.rerun()
        if r1.button(T['btn_rot_left'], use_container_width=True): store.rotate(item.id, -config.ROTATE_STEP); st.rerun()
        if r2.button(T['btn_rot_right'], use_container_width=True): store.rotate(item.id, config.ROTATE_STEP); st.rerun()

        t = store.get(item.id)
        st.caption(T['stat_transform'].format(t.scale, t.display_rotation))
        if st.button(T['btn_reset'], use_container_width=True): store.reset(item.id); st.rerun()

        # Export
        st.divider()
        st.subheader(T['sec_export'])
        out_fmt = st.selectbox(T['lbl_format'], config.SUPPORTED_OUTPUT_FORMATS, key='out_fmt_key')
        logo = utils.active_logo(watermark)

        st.download_button(
            T['btn_dl_one'], engine.encode_image(utils.get_preview(item), out_fmt),
            file_name=export_pipeline.export_filename(item.name), use_container_width=True,
        )
        st.download_button(
            T['btn_dl_zip'], export_pipeline.export_zip(batch.items, store, watermark, logo, out_fmt),
            file_name=config.ZIP_FILENAME, mime="application/zip", use_container_width=True,
        )

        if st.button(T['btn_build_pdf'], type="primary", use_container_width=True):
            try:
                pdf_bytes = export_pipeline.export_document(
                    batch.items, store, watermark, layout,
                    logo=logo, decorations=decorations,
                )
                utils.safe_state_update('pdf_bytes', pdf_bytes)
            except DependencyUnavailable as e:
                logger.error(f"PDF export failed: {e}")
                st.error(T['error_pdf'].format(e))

        if st.session_state['pdf_bytes']:
            st.download_button(T['btn_dl_pdf'], st.session_state['pdf_bytes'], file_name=config.PDF_FILENAME,
                               mime="application/pdf", use_container_width=True)

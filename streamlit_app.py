"""
Quad Simplify — Gallery Edition

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time

import streamlit as st
from PIL import Image, ImageDraw

from quad_simplify.config import SimplifyConfig
from quad_simplify.image_io import compute_target_size
from quad_simplify.model import Model

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Quad Simplify",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = SimplifyConfig()
_ANALYSIS_SIDE = 256

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Cormorant+Garamond:ital,wght@0,300;0,400;1,300&family=Inter:wght@200;300;400&display=swap');

    .stApp {
        background-color: #faf9f6;
        color: #2a2a2a;
        font-family: 'Inter', 'Helvetica Neue', sans-serif;
    }
    .block-container {
        max-width: 1000px;
        padding-top: 3.5rem;
        padding-bottom: 4rem;
    }

    .gallery-title {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-size: 2.8rem;
        font-weight: 300;
        letter-spacing: 0.06em;
        text-align: center;
        color: #1a1a1a;
        border-bottom: 1px solid #1a1a1a;
        padding-bottom: 0.6rem;
        margin-bottom: 0.5rem;
    }
    .gallery-subtitle {
        font-family: 'Inter', sans-serif;
        font-size: 0.75rem;
        font-weight: 300;
        color: #1a1a1a;
        letter-spacing: 0.04em;
        line-height: 1.8;
        margin-bottom: 3.5rem;
    }
    .slider-desc {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-size: 0.95rem;
        font-weight: 300;
        font-style: italic;
        color: #6a6a64;
        line-height: 1.6;
        margin-top: -0.5rem;
        margin-bottom: 1rem;
    }
    .catalogue-line {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-size: 1.1rem;
        font-style: italic;
        color: #2a2a2a;
        text-align: center;
        margin-top: 0.8rem;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    header {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# -- Helpers -----------------------------------------------------------

def _add_passepartout(img: Image.Image, border: int = 20) -> Image.Image:
    w, h = img.size
    bg = (250, 249, 246)
    canvas = Image.new("RGB", (w + border * 2, h + border * 2), bg)
    canvas.paste(img, (border, border))
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(
        [border - 1, border - 1, border + w, border + h],
        outline=(224, 222, 216), width=1,
    )
    return canvas


# -- Title -------------------------------------------------------------
st.markdown(
    '<div class="gallery-title">Quad Simplify</div>',
    unsafe_allow_html=True,
)
st.markdown(
    '<div class="gallery-subtitle">'
    "Upload any image and this app will rebuild it from flat-coloured "
    "rectangles. It starts with a single block holding the average colour of "
    "the whole picture, then repeatedly splits whichever block approximates "
    "its pixels worst into four smaller ones. Detail gathers around edges and "
    "texture while calm areas stay coarse."
    "</div>",
    unsafe_allow_html=True,
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2 = st.columns(2)
with ctrl1:
    iterations = st.slider("Iterations", 1, 4096, _DEFAULTS.iterations)
    st.markdown(
        '<div class="slider-desc">'
        "How many times a block is split. More iterations give a closer, "
        "busier approximation."
        "</div>",
        unsafe_allow_html=True,
    )
with ctrl2:
    analysis_side = st.slider("Analysis size (px)", 32, 1024, _ANALYSIS_SIDE)
    st.markdown(
        '<div class="slider-desc">'
        "The image is shrunk to this longest side before splitting, then "
        "drawn back at full size. Smaller values are faster and blockier."
        "</div>",
        unsafe_allow_html=True,
    )
padding = st.checkbox("Grid padding", value=_DEFAULTS.padding)

st.markdown("---")

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select artwork", type=["jpg", "jpeg", "png", "webp", "bmp", "jfif"],
)

if uploaded is not None:
    original = Image.open(io.BytesIO(uploaded.getvalue())).convert("RGB")
    source = original
    if max(original.size) > analysis_side:
        w, h = compute_target_size(original.width, original.height, analysis_side)
        source = original.resize((w, h), Image.LANCZOS)

    if st.button("SIMPLIFY", type="primary", use_container_width=True):
        cfg = SimplifyConfig(iterations=iterations, padding=padding)
        t0 = time.perf_counter()
        model = Model(source, cfg)
        model.run(cfg.iterations)
        result = Image.fromarray(model.render(original.width, original.height))
        elapsed = time.perf_counter() - t0

        col_a, col_b = st.columns(2)
        with col_a:
            st.image(_add_passepartout(original), use_container_width=True)
            st.markdown('<div class="catalogue-line">Original</div>', unsafe_allow_html=True)
        with col_b:
            st.image(_add_passepartout(result), use_container_width=True)
            st.markdown(
                f'<div class="catalogue-line">{len(model.leaves)} quads</div>',
                unsafe_allow_html=True,
            )

        m1, m2, m3 = st.columns(3)
        m1.metric("Splits", f"{model.steps}")
        m2.metric("Average error", f"{model.average_error():.2f}")
        m3.metric("Time", f"{elapsed:.1f} s")

        buf = io.BytesIO()
        result.save(buf, format="PNG")
        st.download_button(
            "DOWNLOAD PNG",
            data=buf.getvalue(),
            file_name="quads.png",
            mime="image/png",
            use_container_width=True,
        )

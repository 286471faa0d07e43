from __future__ import annotations

import numpy as np
import streamlit as st

from perlin2d.cli import render
from perlin2d.config import MAX_SIDE, RenderConfig
from viz.export import array_to_npy_bytes, gray_to_png_bytes

st.set_page_config(
    page_title="Perlin Noise",
    page_icon="~",
    layout="wide",
)


def _qp_get(name: str) -> str | None:
    raw = st.query_params.get(name)
    if isinstance(raw, list):
        return str(raw[0]) if raw else None
    return raw


@st.cache_data(show_spinner=False)
def _render(
    *,
    width: int,
    height: int,
    px_per_grid: int,
    seed: int | None,
    show_grid: bool,
) -> tuple[np.ndarray, np.ndarray]:
    return render(
        RenderConfig(
            width=int(width),
            height=int(height),
            px_per_grid=int(px_per_grid),
            seed=seed,
            show_grid=bool(show_grid),
        )
    )


# URL values seed the widgets; malformed ones fall back to the defaults.
initial = RenderConfig.from_strings(
    width=_qp_get("w"),
    height=_qp_get("h"),
    px_per_grid=_qp_get("grid"),
    seed=_qp_get("seed"),
    show_grid=_qp_get("lines"),
)

with st.sidebar:
    st.header("Perlin noise")
    use_seed = st.checkbox(
        "Reseed permutation table",
        value=initial.seed is not None,
        help="Unchecked keeps Ken Perlin's canonical table.",
    )
    seed = st.number_input(
        "Seed",
        value=int(initial.seed or 0),
        step=1,
        disabled=not use_seed,
    )
    px_per_grid = st.slider(
        "Pixels per grid cell",
        min_value=4,
        max_value=400,
        value=int(min(max(initial.px_per_grid, 4), 400)),
    )
    width = st.number_input(
        "Width", min_value=1, max_value=MAX_SIDE, value=int(initial.width), step=1
    )
    height = st.number_input(
        "Height", min_value=1, max_value=MAX_SIDE, value=int(initial.height), step=1
    )
    show_grid = st.checkbox("Show grid lines", value=initial.show_grid)

    if st.button("Update URL with current settings"):
        params = {
            "w": str(int(width)),
            "h": str(int(height)),
            "grid": str(int(px_per_grid)),
            "lines": "1" if show_grid else "0",
        }
        if use_seed:
            params["seed"] = str(int(seed))
        st.query_params.clear()
        st.query_params.update(params)

z, img = _render(
    width=int(width),
    height=int(height),
    px_per_grid=int(px_per_grid),
    seed=int(seed) if use_seed else None,
    show_grid=bool(show_grid),
)

png = gray_to_png_bytes(img)
st.image(png, caption="Noise (grayscale)")

c1, c2 = st.columns(2)
with c1:
    st.download_button(
        "Download PNG",
        data=png,
        file_name="perlin.png",
        mime="image/png",
    )
with c2:
    st.download_button(
        "Download .npy",
        data=array_to_npy_bytes(z),
        file_name="perlin.npy",
        mime="application/octet-stream",
    )

st.caption(
    f"min={float(np.min(z)):.4f}  max={float(np.max(z)):.4f}  "
    f"mean={float(np.mean(z)):.4f} (values are not clamped)"
)

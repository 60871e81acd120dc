from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from pauconnect.api.routes import router as api_router
from pauconnect.core.config import Settings, load_settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app() -> FastAPI:
    settings = load_settings()
    configure_logging(settings)
    app = FastAPI(title="PAU Connect API", version="0.1.0")

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=HTMLResponse)
    def index() -> HTMLResponse:
        return HTMLResponse(_INDEX_HTML)

    return app


app = create_app()


def run() -> None:
    settings = load_settings()
    uvicorn.run("pauconnect.main:app", host=settings.app_host, port=settings.app_port)


_INDEX_HTML = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8"/>
    <title>PAU.CONNECT</title>
    <style>
      body { font-family: Arial, sans-serif; margin: 24px; }
      .row { margin: 12px 0; }
      .card { border: 1px solid #ddd; padding: 8px; margin: 8px 0; }
      .badge { font-size: 12px; padding: 2px 6px; border-radius: 8px; margin-left: 6px; }
      .guidance { background: #ffedd5; }
      .alumni { background: #d1fae5; }
      .muted { color: #666; font-size: 12px; }
      button { margin-right: 8px; }
    </style>
  </head>
  <body>
    <h2>Public Wall</h2>
    <div class="muted">Browse members by college and batch. Contact details unlock after sign-in.</div>
    <div class="row">
      <input id="search" placeholder="Search name, role, college, batch..." />
      <button id="resetBtn">Reset</button>
    </div>
    <div class="row">
      <label>College <select id="college"></select></label>
      <label>Batch <select id="batch"></select></label>
      <label><input type="checkbox" id="guidanceOnly" /> Guidance needed</label>
      <label><input type="checkbox" id="alumniOnly" /> Alumni only</label>
    </div>
    <div class="row muted" id="status">Loading profiles...</div>
    <div id="members"></div>
    <script>
      const state = { generation: 0, optionsLoaded: false };

      const searchEl = document.getElementById("search");
      const collegeEl = document.getElementById("college");
      const batchEl = document.getElementById("batch");
      const guidanceEl = document.getElementById("guidanceOnly");
      const alumniEl = document.getElementById("alumniOnly");
      const statusEl = document.getElementById("status");
      const membersEl = document.getElementById("members");

      function fillSelect(el, options) {
        const current = el.value || "All";
        el.innerHTML = "";
        options.forEach((value) => {
          const opt = document.createElement("option");
          opt.value = value;
          opt.textContent = value;
          el.appendChild(opt);
        });
        el.value = options.includes(current) ? current : "All";
      }

      function badge(text, kind) {
        const span = document.createElement("span");
        span.className = `badge ${kind}`;
        span.textContent = text;
        return span;
      }

      function line(text, className) {
        const div = document.createElement("div");
        if (className) div.className = className;
        div.textContent = text;
        return div;
      }

      function renderMembers(members) {
        membersEl.innerHTML = "";
        members.forEach((m) => {
          const div = document.createElement("div");
          div.className = "card";
          const name = document.createElement("strong");
          name.textContent = m.full_name;
          div.appendChild(name);
          if (m.guidance_needed) div.appendChild(badge("Guidance Needed", "guidance"));
          if (m.alumni) div.appendChild(badge("Alumni", "alumni"));
          div.appendChild(line(m.designation));
          div.appendChild(line(`${m.college} · ${m.batch}`, "muted"));
          div.appendChild(line(m.university, "muted"));
          const link = document.createElement("a");
          link.href = `/api/profiles/${encodeURIComponent(m.id)}`;
          link.textContent = "View Full Profile";
          div.appendChild(link);
          membersEl.appendChild(div);
        });
      }

      async function refresh() {
        const generation = ++state.generation;
        const params = new URLSearchParams({
          search: searchEl.value,
          college: collegeEl.value || "All",
          batch: batchEl.value || "All",
          guidance_only: guidanceEl.checked,
          alumni_only: alumniEl.checked,
        });
        try {
          const res = await fetch(`/api/directory?${params}`);
          const data = await res.json();
          if (generation !== state.generation) return;
          if (!res.ok) {
            statusEl.textContent = data.detail || "Failed to load profiles";
            renderMembers([]);
            return;
          }
          fillSelect(collegeEl, data.college_options);
          if (!state.optionsLoaded) {
            fillSelect(batchEl, data.batch_options);
            state.optionsLoaded = true;
          }
          statusEl.textContent = `Showing ${data.count} profiles`;
          renderMembers(data.members);
        } catch (e) {
          if (generation !== state.generation) return;
          statusEl.textContent = "Failed to load profiles";
        }
      }

      searchEl.oninput = refresh;
      [collegeEl, batchEl, guidanceEl, alumniEl].forEach((el) => (el.onchange = refresh));
      document.getElementById("resetBtn").onclick = () => {
        searchEl.value = "";
        collegeEl.value = "All";
        batchEl.value = "All";
        guidanceEl.checked = false;
        alumniEl.checked = false;
        refresh();
      };

      refresh();
    </script>
  </body>
</html>
"""

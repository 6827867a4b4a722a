"""HTML for the login, chat and new-card pages.

Pages are static strings with inline JS; ``render_page`` substitutes the
client public-mode flag. The chat transcript lives only in the browser.
"""

# ruff: noqa: E501

_HEAD = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>__TITLE__</title>
  <link rel="stylesheet" href="/static/styles.css" />
</head>
"""

LOGIN_PAGE = _HEAD + """<body>
<div class="center">
  <div class="box login">
    <h1>Knowledge Card Chat</h1>
    <p class="muted">Enter the shared password to access the test chat.</p>
    <form id="login-form">
      <input id="password" class="input" type="password" placeholder="Password" autocomplete="current-password" />
      <p id="login-error" class="error hidden">That password doesn't look right.</p>
      <button type="submit" class="btn" style="width:100%">Continue</button>
    </form>
  </div>
</div>
<script>
  const params = new URLSearchParams(window.location.search);
  const next = params.get("next") || "/chat";
  document.getElementById("login-form").addEventListener("submit", async (e) => {
    e.preventDefault();
    const error = document.getElementById("login-error");
    error.classList.add("hidden");
    const res = await fetch("/api/login", {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({ password: document.getElementById("password").value }),
    });
    if (!res.ok) {
      error.classList.remove("hidden");
      return;
    }
    // Only follow same-site paths
    window.location.assign(next.startsWith("/") && !next.startsWith("//") ? next : "/chat");
  });
</script>
</body>
</html>
"""

CHAT_PAGE = _HEAD + """<body>
<div id="layout" class="chat-layout">
  <div class="box chat-main">
    <div class="chat-header">
      <div class="row">
        <h1 style="margin:0;font-size:1.25rem">Knowledge Card Chat</h1>
        <label id="debug-toggle" class="muted hidden">
          <input id="show-debug" type="checkbox" /> Show debug
        </label>
      </div>
      <div id="debug-meta" class="row hidden" style="justify-content:flex-start;margin-top:4px">
        <p class="muted" style="margin:0">Confidence: <strong id="confidence">low</strong></p>
        <a class="muted" href="/admin/new-card">Add knowledge card</a>
      </div>
    </div>
    <div id="transcript" class="transcript"></div>
    <p id="thinking" class="muted hidden" style="padding:0 16px">Thinking…</p>
    <div class="composer">
      <input id="question" class="input" placeholder="Ask a test question…" />
      <button id="send" class="btn">Send</button>
    </div>
  </div>
  <div id="debug-panel" class="box debug-panel hidden">
    <h2 style="margin:0;font-size:1.1rem">Debug: Retrieved Cards</h2>
    <p class="muted">Top matches used for grounding.</p>
    <div id="debug-cards"><p class="muted">No cards yet.</p></div>
  </div>
</div>
<script>
  const PUBLIC_MODE = __PUBLIC_MODE__;
  const STORAGE_KEY = "kb_show_debug";
  let showDebug = localStorage.getItem(STORAGE_KEY) === null || localStorage.getItem(STORAGE_KEY) === "true";
  let loading = false;

  const $ = (id) => document.getElementById(id);

  function renderDebugVisibility() {
    const visible = !PUBLIC_MODE && showDebug;
    $("debug-toggle").classList.toggle("hidden", PUBLIC_MODE);
    $("debug-meta").classList.toggle("hidden", !visible);
    $("debug-panel").classList.toggle("hidden", !visible);
    $("layout").classList.toggle("with-debug", visible);
    $("show-debug").checked = showDebug;
  }

  function addTurn(role, content) {
    const turn = document.createElement("div");
    turn.className = "turn " + role;
    const bubble = document.createElement("div");
    bubble.className = "bubble";
    bubble.textContent = content;
    turn.appendChild(bubble);
    $("transcript").appendChild(turn);
    $("transcript").scrollTop = $("transcript").scrollHeight;
  }

  function renderDebugCards(cards) {
    const root = $("debug-cards");
    root.replaceChildren();
    if (!cards.length) {
      const empty = document.createElement("p");
      empty.className = "muted";
      empty.textContent = "No cards yet.";
      root.appendChild(empty);
      return;
    }
    for (const c of cards) {
      const card = document.createElement("div");
      card.className = "debug-card";
      const title = document.createElement("div");
      title.textContent = c.title;
      const sim = document.createElement("div");
      sim.className = "muted";
      sim.textContent = "similarity: " + Number(c.similarity).toFixed(3);
      card.append(title, sim);
      root.appendChild(card);
    }
  }

  async function send() {
    const q = $("question").value.trim();
    if (!q || loading) return;
    addTurn("user", q);
    $("question").value = "";
    loading = true;
    $("thinking").classList.remove("hidden");
    try {
      const res = await fetch("/api/chat", {
        method: "POST",
        headers: { "Content-Type": "application/json" },
        body: JSON.stringify({ question: q }),
      });
      const data = await res.json();
      addTurn("assistant", data.answer || data.error || "Something went wrong.");
      if (!PUBLIC_MODE && showDebug) {
        renderDebugCards((data.debug && data.debug.cards) || []);
        $("confidence").textContent = data.confidence || "low";
      }
    } finally {
      loading = false;
      $("thinking").classList.add("hidden");
    }
  }

  $("show-debug").addEventListener("change", (e) => {
    showDebug = e.target.checked;
    localStorage.setItem(STORAGE_KEY, String(showDebug));
    renderDebugVisibility();
  });
  $("send").addEventListener("click", send);
  $("question").addEventListener("keydown", (e) => { if (e.key === "Enter") send(); });
  renderDebugVisibility();
</script>
</body>
</html>
"""

NEW_CARD_PAGE = _HEAD + """<body>
<div class="admin">
  <a class="muted" href="/chat">&larr; Back to chat</a>
  <h1>Add Knowledge Card</h1>
  <p class="muted">Internal tool for adding a reusable policy/answer card.</p>
  <form id="card-form">
    <label for="title">Title</label>
    <input id="title" class="input" placeholder="e.g. Where we're based" required />
    <label for="topics">Topics (comma-separated)</label>
    <input id="topics" class="input" placeholder="e.g. location, studio, contact" />
    <label for="confidence">Confidence (0-1)</label>
    <input id="confidence" class="input" value="0.9" placeholder="0.9" />
    <label for="answer">Answer</label>
    <textarea id="answer" class="input" placeholder="Write the reusable, generalized reply here…" required></textarea>
    <p><button id="save" class="btn" type="submit">Save card</button></p>
    <p id="status" class="muted"></p>
  </form>
</div>
<script>
  const form = document.getElementById("card-form");
  const save = document.getElementById("save");
  const status = document.getElementById("status");
  form.addEventListener("submit", async (e) => {
    e.preventDefault();
    status.textContent = "";
    save.disabled = true;
    save.textContent = "Saving…";
    const confidence = Number(document.getElementById("confidence").value);
    const res = await fetch("/api/cards/create", {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({
        title: document.getElementById("title").value,
        topics: document.getElementById("topics").value.split(",").map((t) => t.trim()).filter(Boolean),
        answer: document.getElementById("answer").value,
        confidence: Number.isNaN(confidence) ? null : confidence,
      }),
    });
    const data = await res.json();
    save.disabled = false;
    save.textContent = "Save card";
    if (!res.ok) {
      status.textContent = (data && data.error) || "Something went wrong saving the card.";
      return;
    }
    status.textContent = "Saved ✔ Card ID: " + data.id;
    form.reset();
    document.getElementById("confidence").value = "0.9";
  });
</script>
</body>
</html>
"""

_TITLES = {
    "login": "Sign in",
    "chat": "Knowledge Card Chat",
    "new_card": "Add Knowledge Card",
}
_PAGES = {
    "login": LOGIN_PAGE,
    "chat": CHAT_PAGE,
    "new_card": NEW_CARD_PAGE,
}


def render_page(name: str, public_mode_client: bool = False) -> str:
    """Return the HTML for a page with the public-mode flag filled in."""
    html = _PAGES[name]
    return html.replace("__TITLE__", _TITLES[name]).replace(
        "__PUBLIC_MODE__", "true" if public_mode_client else "false"
    )

"""Browser UI: login gate or the films/series editor, rendered server side."""
from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from cinefam.api.state import AppState, get_state
from cinefam.models.catalog import FILMS, SERIES

router = APIRouter()

TITLE = "CineFam Admin Portal"

_STYLE = """
body{font-family:system-ui,sans-serif;margin:0;background:#f3f4f6;color:#1f2937}
header{background:#4f46e5;color:#fff;padding:16px 32px;display:flex;justify-content:space-between;align-items:center}
main{max-width:1200px;margin:0 auto;padding:32px}
.card{background:#fff;border-radius:8px;box-shadow:0 2px 6px rgba(0,0,0,.1);padding:24px}
.tabs a{padding:12px 20px;display:inline-block;color:#6b7280;text-decoration:none;border-bottom:2px solid transparent}
.tabs a.active{color:#4f46e5;border-color:#4f46e5}
.record{border:1px solid #e5e7eb;border-radius:8px;padding:24px;margin:24px 0;background:#f9fafb;display:grid;grid-template-columns:1fr 3fr;gap:24px}
.record .actions{grid-column:1/3;text-align:right}
.field{margin-bottom:12px}.field label{display:block;font-size:.85em;margin-bottom:4px}
input,textarea{width:100%;box-sizing:border-box;padding:8px;border:1px solid #d1d5db;border-radius:6px}
img{width:100%;border-radius:8px;margin-top:8px}
iframe{width:100%;aspect-ratio:16/9;border:0;border-radius:8px}
.error{background:#fef2f2;border-left:4px solid #ef4444;padding:12px;color:#b91c1c;margin:12px 0}
button{padding:8px 16px;border:0;border-radius:6px;cursor:pointer}
.delete{color:#dc2626;background:none}.add{background:#16a34a;color:#fff}
#save{background:#4f46e5;color:#fff;padding:12px 24px}#save.ok{background:#16a34a}#save:disabled{background:#9ca3af}
"""

_LOGIN_SCRIPT = """
async function login(){
  const code=document.getElementById('code').value;
  const r=await fetch('/api/session/login',{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify({code})});
  if(r.ok){location.reload();return;}
  const body=await r.json().catch(()=>({}));
  const box=document.getElementById('error');box.textContent=body.detail||'Authentication failed. Please try again.';box.hidden=false;
}
document.getElementById('code').addEventListener('keydown',e=>{if(e.key==='Enter')login();});
"""

_EDITOR_SCRIPT = """
const errorBox=document.getElementById('error');
function showError(msg){errorBox.textContent=msg;errorBox.hidden=!msg;}
async function call(method,url,body){
  const r=await fetch(url,{method,headers:{'Content-Type':'application/json'},body:body===undefined?undefined:JSON.stringify(body)});
  if(!r.ok){const b=await r.json().catch(()=>({}));throw new Error(b.detail||('HTTP '+r.status));}
  return r.status===204?null:r.json();
}
document.querySelectorAll('.record').forEach(el=>{
  const base='/api/'+el.dataset.collection+'/'+encodeURIComponent(el.dataset.id);
  el.querySelectorAll('[data-field]').forEach(input=>{
    input.addEventListener('input',async()=>{
      try{
        const rec=await call('PATCH',base+'/fields/'+input.dataset.field,{value:input.value});
        el.querySelector('img.poster').src=rec.poster_url;
        el.querySelector('img.backdrop').src=rec.backdrop_url;
        if(input.dataset.field==='iframe_url')location.reload();
        showError('');
      }catch(e){showError(e.message);}
    });
  });
  el.querySelector('[data-action=delete]').addEventListener('click',async()=>{await call('DELETE',base);location.reload();});
});
document.getElementById('add').addEventListener('click',async()=>{await call('POST','/api/'+document.body.dataset.tab);location.reload();});
document.getElementById('logout').addEventListener('click',async()=>{await call('POST','/api/session/logout');location.reload();});
const saveBtn=document.getElementById('save');
saveBtn.addEventListener('click',async()=>{
  saveBtn.disabled=true;saveBtn.textContent='Saving...';
  try{
    await call('POST','/api/catalog/save');
    saveBtn.classList.add('ok');saveBtn.textContent='Saved Successfully!';showError('');
    setTimeout(()=>{saveBtn.classList.remove('ok');saveBtn.textContent='Save Changes';},SUCCESS_MS);
  }catch(e){showError(e.message);saveBtn.textContent='Save Changes';}
  finally{saveBtn.disabled=false;}
});
"""


def _page(body: str, script: str, tab: str = "") -> str:
    return (
        '<!doctype html><html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width,initial-scale=1">'
        f"<title>{TITLE}</title><style>{_STYLE}</style></head>"
        f'<body data-tab="{tab}">{body}<script>{script}</script></body></html>'
    )


def get_login_html() -> str:
    body = (
        '<main><div class="card" style="max-width:420px;margin:80px auto">'
        f"<h1>{TITLE}</h1>"
        '<div class="field"><label for="code">Access Code</label>'
        '<input id="code" type="password" placeholder="Enter your access code"></div>'
        '<div id="error" class="error" hidden></div>'
        '<button id="login" class="add" onclick="login()">Access Portal</button>'
        "</div></main>"
    )
    return _page(body, _LOGIN_SCRIPT)


def get_editor_html(state: AppState, tab: str) -> str:
    if tab != SERIES:
        tab = FILMS
    if tab == FILMS:
        heading, noun = "Edit Films", "Film"
        editor_html = state.film_editor.render(state.buffer.films)
    else:
        heading, noun = "Edit Series", "Series"
        editor_html = state.series_editor.render(state.buffer.series)

    save = state.saver.status()
    error = save["error"] or state.buffer.error_message
    if save["saving"]:
        save_label, save_attrs = "Saving...", " disabled"
    elif save["success"]:
        save_label, save_attrs = "Saved Successfully!", ' class="ok"'
    else:
        save_label, save_attrs = "Save Changes", ""

    tabs = "".join(
        f'<a href="/?tab={name}" class="{"active" if name == tab else ""}">{label}</a>'
        for name, label in ((FILMS, "Films"), (SERIES, "Series"))
    )
    body = (
        f'<header><h1>{TITLE}</h1><button id="logout">Logout</button></header>'
        "<main>"
        f'<div id="error" class="error"{"" if error else " hidden"}>{escape(error)}</div>'
        f'<div class="card"><nav class="tabs">{tabs}</nav>'
        f'<h2>{heading}</h2><button id="add" class="add">Add New {noun}</button>'
        f"{editor_html}</div>"
        f'<p style="text-align:right"><button id="save"{save_attrs}>{save_label}</button></p>'
        "</main>"
    )
    script = _EDITOR_SCRIPT.replace("SUCCESS_MS", str(int(state.saver.success_clear_sec * 1000)))
    return _page(body, script, tab)


@router.get("/", include_in_schema=False)
def ui_root(tab: str = FILMS, state: AppState = Depends(get_state)) -> HTMLResponse:
    """Login gate when locked, otherwise the editor for the chosen tab."""
    if not state.authenticated:
        html = get_login_html()
    else:
        html = get_editor_html(state, tab)
    return HTMLResponse(html, headers={"Cache-Control": "no-store"})

"""
Formula generator — render a Homebrew formula from a ``FormulaContext``.

Two templates, one per ``FormulaStrategy``:

    direct   each platform block carries its own url + sha256
    gh-cli   same blocks, but downloads go through ``gh release download``
             so private release repositories work

Both read the same fields:
    package, description, executable, homepage, version, license,
    assets[].{cpu, os, sha256, url}

Rendering is strict: a field missing from the context raises
``jinja2.UndefinedError``.  Defaults belong to the context builder.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import jinja2

from formulagen.core.models.formula import FormulaContext, FormulaStrategy

logger = logging.getLogger(__name__)


_PLATFORM_HELPERS = """\
    BINARY_ALIASES = {
        "aarch64-apple-darwin":     {},
        "x86_64-apple-darwin":      {},
        "x86_64-pc-windows-gnu":    {},
        "x86_64-unknown-linux-gnu": {},
    }.freeze

    def target_triple
        cpu = Hardware::CPU.arm? ? "aarch64" : "x86_64"
        os = OS.mac? ? "apple-darwin" : "unknown-linux-gnu"
        "#{cpu}-#{os}"
    end

    def install_binary_aliases!
        BINARY_ALIASES[target_triple.to_sym].each do |source, dests|
            dests.each do |dest|
                bin.install_symlink bin/source.to_s => dest
            end
        end
    end

    def install
{%- for asset in assets %}
        bin.install "{{ executable }}" if OS.{{ asset.os }}? && Hardware::CPU.{{ asset.cpu }}?
{%- endfor %}

        install_binary_aliases!

        doc_files = Dir["README.*", "readme.*", "LICENSE", "LICENSE.*", "CHANGELOG.*"]
        leftover_contents = Dir["*"] - doc_files
        pkgshare.install(*leftover_contents) unless leftover_contents.empty?
    end
end
"""

_HEADER = """\
class {{ package }} < Formula
    desc "{{ description }}"
    homepage "{{ homepage }}"
    version "{{ version }}"
    license "{{ license }}"
"""

DIRECT_TEMPLATE = _HEADER + """
{%- for asset in assets %}
    if OS.{{ asset.os }}? && Hardware::CPU.{{ asset.cpu }}?
        url    "{{ asset.url }}"
        sha256 "{{ asset.sha256 }}"
    end
{%- endfor %}

""" + _PLATFORM_HELPERS

GH_CLI_TEMPLATE = """\
require "download_strategy"

class GitHubCliDownloadStrategy < GitHubArtifactDownloadStrategy
    require "utils/formatter"
    require "utils/github"
    require "system_command"

    def initialize(url, name, version, **meta)
        super
        match_data = %r{^https?://github\\.com/(?<org>[^/]+)/(?<repo>[^/]+)/releases/download/[^/]+/(?<file>[^/]+)$}.match(@url)
        return unless match_data

        @org = match_data[:org]
        @repo = match_data[:repo]
        @filepath = match_data[:file]
    end

    def fetch(timeout: nil)
        ohai "Downloading #{url}"
        if cached_location.exist?
            puts "Already downloaded: #{cached_location}"
        else
            begin
                system_command!("gh", args: [
                    "release", "download",
                    "-R", "#{@org}/#{@repo}",
                    "--pattern", @filepath.to_s,
                    "-O", "#{temporary_path}",
                ], print_stderr: false)
            rescue ErrorDuringExecution
                raise CurlDownloadStrategyError, url
            end
            cached_location.dirname.mkpath
            temporary_path.rename(cached_location.to_s)
        end

        symlink_location.dirname.mkpath
        FileUtils.ln_s cached_location.relative_path_from(symlink_location.dirname), symlink_location, force: true
    end
end

""" + _HEADER + """
{%- for asset in assets %}
    if OS.{{ asset.os }}? && Hardware::CPU.{{ asset.cpu }}?
        url    "{{ asset.url }}", :using => GitHubCliDownloadStrategy
        sha256 "{{ asset.sha256 }}"
    end
{%- endfor %}

""" + _PLATFORM_HELPERS

_TEMPLATES: dict[FormulaStrategy, str] = {
    FormulaStrategy.DIRECT: DIRECT_TEMPLATE,
    FormulaStrategy.GH_CLI: GH_CLI_TEMPLATE,
}

_env = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


def template_for(strategy: FormulaStrategy) -> jinja2.Template:
    """Compiled template for a strategy."""
    return _env.from_string(_TEMPLATES[strategy])


def render(
    strategy: FormulaStrategy,
    context: FormulaContext | Mapping[str, Any],
) -> str:
    """Render the formula text.

    Args:
        strategy: Which download template to use.
        context: A built ``FormulaContext``, or an equivalent mapping.

    Raises:
        jinja2.UndefinedError: The context lacks a referenced field.
    """
    values = context.to_dict() if isinstance(context, FormulaContext) else dict(context)
    logger.debug("Rendering %s formula with %d assets", strategy.value, len(values.get("assets") or ()))
    return template_for(strategy).render(values)
